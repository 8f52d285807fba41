"""
Test Configuration and Utilities

Common base classes and helper functions for BeanWire tests
"""

import unittest
from typing import Type

from beanwire import BeanWireCore, BeanWireModule, Definition


class BeanWireTestCase(unittest.TestCase):
    """
    Base test case class for BeanWire tests.

    Creates a fresh container before each test and closes it afterwards.
    """

    def setUp(self):
        """Create an empty container before each test"""
        self.app = BeanWireCore()

    def tearDown(self):
        """Close the container after each test"""
        self.app.close()

    def define(self, **definitions: Definition) -> None:
        """Register definitions by keyword: self.define(db=Definition(DbConn))"""
        self.app.add_definitions(definitions)


def create_simple_module(**classes: Type) -> BeanWireModule:
    """
    Create a module with singleton registrations for the given classes.

    Args:
        **classes: Bean name -> class, each built without arguments

    Returns:
        A BeanWireModule with the registrations

    Example:
        >>> module = create_simple_module(db=DbConn, cache=Cache)
        >>> app = BeanWireCore(modules=[module])
    """
    module = BeanWireModule()
    with module:
        for name, cls in classes.items():
            module.singleton(name, cls)
    return module
