import unittest
import types
from datum import *
from bindings import bindings

class DatumTest(unittest.TestCase):
    def testSymbol(self):
        self.assertTrue(Symbol("a") is Symbol("a"))
        self.assertFalse(Symbol("a") is Symbol("b"))
        self.assertNotEqual(Symbol("a"), "a")
        self.assertEqual("a", str(Symbol("a")))

    def testChar(self):
        self.assertEqual(Char("a"), Char("a"))
        self.assertNotEqual(Char("a"), Char("b"))
        self.assertNotEqual(Char("a"), "a")
        self.assertEqual(hash(Char("a")), hash(Char("a")))
        self.assertRaises(ValueError, Char, "ab")
        self.assertRaises(ValueError, Char, 1)

    def testMakeList(self):
        l = make_list(1, 2)
        self.assertEqual(1, l.car)
        self.assertEqual(2, l.cdr.car)
        self.assertTrue(l.cdr.cdr is NIL)
        self.assertTrue(make_list() is NIL)
        self.assertEqual(3, make_list(1, 2, tail=3).cdr.cdr)
        self.assertRaises(TypeError, make_list, 1, end=2)
        self.assertEqual(2, cons(1, 2).cdr)

    def testToList(self):
        self.assertEqual([1, 2], to_list(make_list(1, 2)))
        self.assertEqual([], to_list(NIL))
        self.assertEqual([1, 2], to_list((1, 2)))
        self.assertEqual([1, 2], to_list([1, 2]))
        self.assertEqual(None, to_list(make_list(1, tail=2)))
        self.assertEqual(None, to_list("abc"))
        self.assertEqual(None, to_list(None))
        l = make_list(1, 2)
        l.cdr.cdr = l
        self.assertEqual(None, to_list(l))

class BindingsTest(unittest.TestCase):
    def testBindings(self):
        ns = types.SimpleNamespace(x=1)
        with bindings(ns, x=2, y=3):
            self.assertEqual(2, ns.x)
            self.assertEqual(3, ns.y)
            with bindings(ns, x=4):
                self.assertEqual(4, ns.x)
            self.assertEqual(2, ns.x)
        self.assertEqual(1, ns.x)
        self.assertFalse(hasattr(ns, "y"))

    def testBindingsOnError(self):
        ns = types.SimpleNamespace(x=1)
        try:
            with bindings(ns, x=2):
                raise KeyError("x")
        except KeyError:
            pass
        self.assertEqual(1, ns.x)

if __name__ == "__main__":
    unittest.main()
