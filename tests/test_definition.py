import unittest
from typing import Annotated, Literal
from unittest import mock

from variety.definition import Variant, Union
from variety.diagnostics import InvalidVariantError, UnknownFieldError, NotAMemberError, Report
from variety.ontology import Symbol, field
from variety.registry import Registry, define_union
from variety.values import memberships

class VariantTests(unittest.TestCase):
	""" Variants construct values, checking every field on the way in. """

	def setUp(self) -> None:
		self.Point = Variant("Point", x=int, y=int)

	def test_fields_keep_declaration_order(self):
		self.assertEqual(["x", "y"], self.Point.field_names())

	def test_positional_and_keyword_arguments(self):
		self.assertEqual(self.Point(1, 2), self.Point(y=2, x=1))
		self.assertEqual(self.Point(1, 2), self.Point(1, y=2))

	def test_from_descriptor(self):
		Pending = Variant.from_descriptor("Pending", [("amount", float), ("note", str)])
		self.assertEqual(["amount", "note"], Pending.field_names())
		self.assertEqual(2.5, Pending(2.5, "x").amount)

	def test_bad_field_values(self):
		for args, kwargs in [
			(("1", 2), {}),
			((1,), {}),
			((1, 2, 3), {}),
			((1,), {"x": 1, "y": 2}),
			((True, 2.5), {}),
		]:
			with self.subTest(args=args, kwargs=kwargs):
				with self.assertRaises(InvalidVariantError):
					self.Point(*args, **kwargs)

	def test_unknown_keyword(self):
		with self.assertRaises(UnknownFieldError) as cm:
			self.Point(1, 2, z=3)
		self.assertEqual(("z",), cm.exception.names)
		self.assertIs(self.Point, cm.exception.variant)

	def test_malformed_definitions(self):
		for thunk in [
			lambda: Variant("not a name"),
			lambda: Variant("Thing", _hidden=int),
			lambda: Variant("Thing", copy=int),
			lambda: Variant("Thing", a=field(int, default=1), b=int),
			lambda: Variant.from_descriptor("Thing", [("a", int), ("a", str)]),
		]:
			with self.subTest():
				with self.assertRaises(InvalidVariantError):
					thunk()

	def test_a_non_type_constraint_fails_at_construction(self):
		Odd = Variant("Odd", a=42)
		with self.assertRaises(InvalidVariantError):
			Odd(1)

	def test_defaults(self):
		Config = Variant("Config", host=field(str, default="localhost"), port=field(int, default=8080))
		self.assertEqual(Config("localhost", 8080), Config())
		self.assertEqual(9090, Config(port=9090).port)

	def test_alternatives_and_generics(self):
		Error = Variant("Error", message=str, code=field(int, None, default=None), tags=list[str])
		self.assertIsNone(Error("x", tags=[]).code)
		self.assertEqual(404, Error("x", 404, []).code)
		with self.assertRaises(InvalidVariantError):
			Error("x", "404", [])
		with self.assertRaises(InvalidVariantError):
			Error("x", 404, ("a",))

	def test_literal_constraint(self):
		Mode = Variant("Mode", m=Literal["a", "b"])
		self.assertEqual("b", Mode("b").m)
		with self.assertRaises(InvalidVariantError):
			Mode("c")

	def test_unusable_generic_constraint(self):
		Odd = Variant("Odd", x=Annotated[int, "meta"])
		with self.assertRaises(InvalidVariantError):
			Odd(1)

	def test_float_admits_int(self):
		Amount = Variant("Amount", value=float)
		self.assertEqual(3, Amount(3).value)

	def test_nullary_variants_have_one_instance(self):
		Loading = Variant("Loading")
		self.assertIs(Loading(), Loading())
		self.assertEqual("Loading", repr(Loading()))

	def test_unresolved_reference(self):
		Node = Variant("Node", next="Node")
		with self.assertRaises(InvalidVariantError):
			Node(None)

class UnionTests(unittest.TestCase):

	def setUp(self) -> None:
		self.Shape = define_union(
			"Shape",
			Variant("Circle", radius=float),
			("Square", [("side", float)]),
			Variant("Dot"),
		)

	def test_tags_and_ordinals(self):
		self.assertEqual(("Circle", "Square", "Dot"), self.Shape.tags())
		self.assertEqual([0, 1, 2], [self.Shape.ordinal(t) for t in self.Shape.tags()])
		self.assertEqual(3, len(self.Shape))
		self.assertEqual(["Circle", "Square", "Dot"], [v.name for v in self.Shape])

	def test_membership(self):
		circle = self.Shape.Circle(1.0)
		self.assertTrue(self.Shape.admits(circle))
		self.assertIn(circle, self.Shape)
		self.assertIn(self.Shape.Square, self.Shape)
		self.assertEqual("Circle", self.Shape.tag_of(circle))
		self.assertIs(self.Shape.Circle, self.Shape.variant("Circle"))
		stranger = Variant("Circle", radius=float)(1.0)
		self.assertFalse(self.Shape.admits(stranger))
		self.assertFalse(self.Shape.admits("Circle"))
		with self.assertRaises(NotAMemberError):
			self.Shape.tag_of(stranger)
		with self.assertRaises(KeyError):
			self.Shape.variant("Triangle")

	def test_unknown_member_attribute(self):
		with self.assertRaises(AttributeError):
			self.Shape.Triangle

	def test_member_set_is_fixed(self):
		with self.assertRaises(KeyError):
			self.Shape.tag_space.mount("Triangle", Variant("Triangle"))

	def test_unsealed_union_refuses_questions(self):
		raw = Union("Raw", Variant("A"))
		with self.assertRaises(InvalidVariantError):
			raw.tags()

	def test_empty_union(self):
		with self.assertRaises(InvalidVariantError):
			Union("Nothing")

	def test_bad_member(self):
		with self.assertRaises(InvalidVariantError):
			Union("Odd", 42)

class RegistryTests(unittest.TestCase):
	""" Sealing passes each report every problem they find, then fail naming the pass. """

	def expect(self, phase:str, registry:Registry, complaints:int=1):
		with self.assertRaises(InvalidVariantError) as cm:
			registry.seal()
		self.assertEqual(phase, cm.exception.phase)
		self.assertEqual(complaints, len(cm.exception.issues))
		self.assertFalse(registry.sealed)

	def test_defined_twice(self):
		r = Registry("twice")
		r.variant("A")
		r.variant("A", x=int)
		self.expect("define", r)

	def test_undefined_names(self):
		r = Registry("undefined")
		r.variant("Node", value=int, next="Nod")
		r.union("Tree", "Node", "Leaf")
		self.expect("resolve", r, 2)

	def test_union_of_a_union_sharing_a_variant(self):
		r = Registry("nested")
		r.variant("A")
		r.union("U", "A")
		r.union("V", "A", "U")
		r.seal()
		self.assertEqual(("A",), r.V.tags())
		self.assertIs(r.U, r.V.U)

	def test_not_a_union_member(self):
		class Oddball(Symbol):
			def admits(self, value): return False
		r = Registry("odd")
		r.define(Oddball("Thing"))
		r.union("U", Variant("A"), "Thing")
		self.expect("resolve", r)

	def test_circular_unions(self):
		for members in [
			{"A": ["A"]},
			{"A": ["B"], "B": ["A"]},
			{"A": ["B"], "B": ["C"], "C": ["A", "Leaf"]},
		]:
			with self.subTest(members):
				r = Registry("loops")
				r.variant("Leaf")
				for name, inside in members.items():
					r.union(name, *inside)
				self.expect("circular", r, 1)

	def test_tag_collision(self):
		r = Registry("clash")
		r.union("First", Variant("Success", data=str))
		r.union("Second", Variant("Success", data=int))
		r.union("Both", "First", "Second")
		self.expect("flatten", r)

	def test_failed_seal_leaves_memberships_alone(self):
		r = Registry("clash")
		shared = r.variant("Shared", n=int)
		r.union("Good", "Shared")
		r.union("Clash", "Shared", Variant("Shared", n=int))
		self.expect("flatten", r, 2)
		self.assertEqual((), memberships(shared(1)))
		self.assertEqual([], shared.unions)

	def test_same_variant_twice_is_no_collision(self):
		r = Registry("shared")
		shared = r.variant("Shared")
		r.union("Left", Variant("L"), "Shared")
		r.union("Right", Variant("R"), shared)
		r.union("Whole", "Left", "Right")
		r.seal()
		self.assertEqual(("L", "Shared", "R"), r.Whole.tags())
		self.assertEqual({"Left", "Right", "Whole"}, {u.name for u in shared.unions})

	def test_recursive_field_types(self):
		r = Registry("tree")
		r.variant("Leaf")
		r.variant("Node", left="Tree", right="Tree")
		r.union("Tree", "Leaf", "Node")
		r.seal()
		Leaf, Node = r.Leaf, r.Node
		tree = Node(Leaf(), Node(Leaf(), Leaf()))
		self.assertIn(tree, r.Tree)
		with self.assertRaises(InvalidVariantError):
			Node(Leaf(), "not a tree")

	def test_sealed_registry_refuses_more(self):
		r = Registry("done")
		r.variant("A")
		r.seal()
		with self.assertRaises(InvalidVariantError):
			r.variant("B")
		self.assertIs(r, r.seal())

	def test_lookup(self):
		r = Registry("lookup")
		a = r.variant("A")
		u = r.union("U", "A")
		r.seal()
		self.assertIs(a, r["A"])
		self.assertIs(u, r.U)
		self.assertIn("A", r)
		self.assertEqual([u], r.unions())
		self.assertEqual([a], r.variants())
		with self.assertRaises(KeyError):
			r["B"]
		with self.assertRaises(AttributeError):
			r.B

	def test_report_narrates_when_verbose(self):
		report = Report(verbose=1)
		with mock.patch("builtins.print") as fake_print:
			define_union("Loud", Variant("A"), report=report)
		self.assertTrue(fake_print.call_count)

	def test_report_holds_only_the_latest_attempt(self):
		report = Report()
		r = Registry("first", report=report)
		r.variant("A")
		r.variant("A")
		with self.assertRaises(InvalidVariantError):
			r.seal()
		self.assertTrue(report.sick())
		define_union("Fine", Variant("B"), report=report)
		self.assertTrue(report.ok())

if __name__ == '__main__':
	unittest.main()
