"""
Definition Tests

Tests for the Definition data class and value descriptors
"""

import os
import sys
from collections.abc import Hashable
from dataclasses import FrozenInstanceError

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from beanwire import Definition, InvalidDefinitionError, Scope, Value, ValueKind, literal, ref
from conftest import BeanWireTestCase
from fixtures import Cache, DbConn


class TestDefinition(BeanWireTestCase):
    """Tests for Definition"""

    def test_raw_values_become_literals(self):
        definition = Definition(Cache, constructor_args=[1], properties={"ttl": 30})

        self.assertEqual(definition.constructor_args, (literal(1),))
        self.assertEqual(definition.properties["ttl"], literal(30))

    def test_values_kept(self):
        definition = Definition(Cache, properties={"store": ref("db")})

        self.assertTrue(definition.properties["store"].is_ref)

    def test_properties_read_only(self):
        definition = Definition(Cache, properties={"ttl": 30})

        with self.assertRaises(TypeError):
            definition.properties["ttl"] = literal(1)

    def test_frozen(self):
        definition = Definition(DbConn)

        with self.assertRaises(FrozenInstanceError):
            definition.scope = Scope.PROTOTYPE

    def test_source_mapping_not_shared(self):
        properties = {"ttl": 30}
        definition = Definition(Cache, properties=properties)
        properties["ttl"] = 1

        self.assertEqual(definition.properties["ttl"], literal(30))

    def test_needs_class_or_alias(self):
        with self.assertRaises(InvalidDefinitionError):
            Definition()

    def test_scope_from_string(self):
        self.assertIs(Definition(DbConn, scope="prototype").scope, Scope.PROTOTYPE)

    def test_unknown_scope(self):
        with self.assertRaises(InvalidDefinitionError):
            Definition(DbConn, scope="request")

    def test_alias_must_be_name(self):
        with self.assertRaises(InvalidDefinitionError):
            Definition(DbConn, alias=42)

    def test_alias_of(self):
        definition = Definition.alias_of("db")

        self.assertTrue(definition.is_alias)
        self.assertIsNone(definition.class_name)

    def test_repr(self):
        self.assertEqual(repr(Definition.alias_of("db")), "Definition(alias='db')")
        self.assertEqual(
            repr(Definition(DbConn, scope="prototype")),
            "Definition(class=DbConn, scope=prototype)",
        )
        self.assertEqual(
            repr(Definition("app.db.DbConn")),
            "Definition(class=app.db.DbConn, scope=singleton)",
        )


class TestValue(BeanWireTestCase):
    """Tests for literal() and ref()"""

    def test_kinds(self):
        self.assertIs(ref("db").kind, ValueKind.REFERENCE)
        self.assertIs(literal(1).kind, ValueKind.LITERAL)

    def test_reference_needs_name(self):
        with self.assertRaises(InvalidDefinitionError):
            ref("")
        with self.assertRaises(InvalidDefinitionError):
            Value(ValueKind.REFERENCE, DbConn)

    def test_collections(self):
        self.assertTrue(literal([1]).is_collection)
        self.assertTrue(literal({"a": 1}).is_collection)
        self.assertFalse(literal("abc").is_collection)
        self.assertFalse(ref("db").is_collection)

    def test_repr(self):
        self.assertEqual(repr(ref("db")), "ref('db')")
        self.assertEqual(repr(literal(3)), "literal(3)")

    def test_equality(self):
        self.assertEqual(ref("db"), ref("db"))
        self.assertNotEqual(ref("db"), literal("db"))


class TestDefinitionHashing(BeanWireTestCase):
    """Definitions compare by value and are not hashable"""

    def test_not_hashable(self):
        definition = Definition(DbConn)

        self.assertNotIsInstance(definition, Hashable)
        with self.assertRaises(TypeError):
            hash(definition)

    def test_equality(self):
        self.assertEqual(
            Definition(Cache, properties={"ttl": 1}),
            Definition(Cache, properties={"ttl": 1}),
        )
        self.assertNotEqual(Definition(Cache), Definition(Cache, scope="prototype"))
