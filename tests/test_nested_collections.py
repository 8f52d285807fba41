"""
Nested Collection Tests

Tests for references embedded in list, tuple and dict literals, used as
constructor arguments or property values.
"""

import os
import sys
from collections import OrderedDict, defaultdict, namedtuple

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from beanwire import Definition, DefinitionNotFoundError, Scope, literal, ref
from conftest import BeanWireTestCase
from fixtures import Cache, DbConn, Holder


Endpoints = namedtuple("Endpoints", ["read", "write"])


class Tags(list):
    pass


class TestNestedArguments(BeanWireTestCase):
    """References inside constructor argument collections"""

    def setUp(self):
        super().setUp()
        self.define(db=Definition(DbConn))

    def test_references_resolved_at_every_depth(self):
        """dict -> list -> dict nesting is fully resolved"""
        self.define(holder=Definition(Holder, constructor_args=[literal({
            "primary": ref("db"),
            "replicas": [ref("db"), {"deep": ref("db")}],
            "port": 5432,
        })]))

        items = self.app.get("holder").items
        db = self.app.get("db")

        self.assertIs(items["primary"], db)
        self.assertIs(items["replicas"][0], db)
        self.assertIs(items["replicas"][1]["deep"], db)
        self.assertEqual(items["port"], 5432)

    def test_plain_collection_passed_unchanged(self):
        """A literal collection without references is the same object"""
        plain = [1, 2, [3, 4], {"k": "v"}]
        self.define(holder=Definition(Holder, constructor_args=[plain]))

        self.assertIs(self.app.get("holder").items, plain)

    def test_literal_descriptors_are_unwrapped(self):
        """literal() elements become their value"""
        self.define(holder=Definition(Holder, constructor_args=[
            literal([literal(1), ref("db"), "raw"])
        ]))

        items = self.app.get("holder").items

        self.assertEqual(items[0], 1)
        self.assertIs(items[1], self.app.get("db"))
        self.assertEqual(items[2], "raw")

    def test_nested_literal_collection_is_resolved(self):
        """literal() around a nested collection is resolved too"""
        self.define(holder=Definition(Holder, constructor_args=[
            literal({"group": literal([ref("db")])})
        ]))

        items = self.app.get("holder").items

        self.assertEqual(items["group"], [self.app.get("db")])

    def test_tuple_stays_tuple(self):
        """Tuples are rebuilt as tuples"""
        self.define(holder=Definition(Holder, constructor_args=[(ref("db"), 1)]))

        items = self.app.get("holder").items

        self.assertIsInstance(items, tuple)
        self.assertEqual(items, (self.app.get("db"), 1))

    def test_namedtuple_stays_namedtuple(self):
        """Named tuples keep their type"""
        self.define(holder=Definition(Holder, constructor_args=[
            Endpoints(read=ref("db"), write="primary")
        ]))

        items = self.app.get("holder").items

        self.assertIsInstance(items, Endpoints)
        self.assertIs(items.read, self.app.get("db"))
        self.assertEqual(items.write, "primary")

    def test_dict_keys_are_kept(self):
        """Resolved dicts keep keys and order"""
        self.define(holder=Definition(Holder, constructor_args=[
            {"b": ref("db"), "a": 1}
        ]))

        items = self.app.get("holder").items

        self.assertEqual(list(items), ["b", "a"])

    def test_missing_nested_reference_raises(self):
        """A nested reference to an unknown name fails the whole resolution"""
        self.define(holder=Definition(Holder, constructor_args=[[[ref("nope")]]]))

        with self.assertRaises(DefinitionNotFoundError):
            self.app.get("holder")

    def test_nested_prototype_references_are_distinct(self):
        """Each nested reference to a prototype builds a new object"""
        self.define(
            conn=Definition(DbConn, scope=Scope.PROTOTYPE),
            holder=Definition(Holder, constructor_args=[[ref("conn"), ref("conn")]]),
        )

        first, second = self.app.get("holder").items

        self.assertIsNot(first, second)


    def test_defaultdict_keeps_default_factory(self):
        source = defaultdict(list, {"a": ref("db")})
        self.define(holder=Definition(Holder, constructor_args=[source]))

        items = self.app.get("holder").items

        self.assertIsInstance(items, defaultdict)
        self.assertIs(items.default_factory, list)
        self.assertIs(items["a"], self.app.get("db"))
        self.assertEqual(items["missing"], [])
        self.assertTrue(source["a"].is_ref)

    def test_ordered_dict_stays_ordered_dict(self):
        self.define(holder=Definition(Holder, constructor_args=[
            OrderedDict([("z", ref("db")), ("a", 1)])
        ]))

        items = self.app.get("holder").items

        self.assertIs(type(items), OrderedDict)
        self.assertEqual(list(items), ["z", "a"])

    def test_list_subclass_kept(self):
        self.define(holder=Definition(Holder, constructor_args=[Tags([ref("db"), "x"])]))

        items = self.app.get("holder").items

        self.assertIs(type(items), Tags)
        self.assertEqual(items, [self.app.get("db"), "x"])

class TestNestedProperties(BeanWireTestCase):
    """References inside property collections"""

    def test_property_list_resolved(self):
        """A property holding a list of references is resolved"""
        self.define(
            db=Definition(DbConn),
            cache=Definition(Cache, properties={"store": [ref("db"), ref("db")]}),
        )

        store = self.app.get("cache").store
        db = self.app.get("db")

        self.assertEqual(store, [db, db])

    def test_property_plain_dict_unchanged(self):
        """A plain dict property is injected as the same object"""
        options = {"ttl": 1}
        self.define(cache=Definition(Cache, properties={"store": options}))

        self.assertIs(self.app.get("cache").store, options)
