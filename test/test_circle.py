import unittest
from circle import find_shared, is_compound, LabelTable
from datum import Symbol, Pair, NIL, make_list
from format import format

class CircleTest(unittest.TestCase):
    def writeEquals(self, result, obj):
        self.assertEqual(result, format("~w", obj))

    def testCompound(self):
        self.assertTrue(is_compound([1]))
        self.assertTrue(is_compound((1,)))
        self.assertTrue(is_compound(Pair(1)))
        self.assertFalse(is_compound([]))
        self.assertFalse(is_compound(()))
        self.assertFalse(is_compound(NIL))
        self.assertFalse(is_compound("abc"))
        self.assertFalse(is_compound(Symbol("a")))

    def testFindShared(self):
        x = [1]
        y = [2]
        self.assertEqual([], find_shared([x, y]))
        self.assertEqual([], find_shared(["abc", "abc"]))
        shared = find_shared([y, x, x, y])
        self.assertEqual(2, len(shared))
        self.assertTrue(shared[0] is x)
        self.assertTrue(shared[1] is y)

    def testFindSharedLongList(self):
        self.assertEqual([], find_shared(make_list(*range(5000))))

    def testLabelTable(self):
        x = [1]
        labels = LabelTable([x, x, [2]])
        self.assertEqual(1, len(labels))
        self.assertTrue(x in labels)
        self.assertEqual("#1=", labels.tag(x))
        self.assertEqual("#1#", labels.tag(x))
        self.assertEqual("#1#", labels.tag(x))
        self.assertEqual(None, labels.tag([1]))

    def testCircularPairs(self):
        l = make_list(Symbol("a"), Symbol("b"), Symbol("c"))
        l.cdr.cdr.cdr = l
        self.writeEquals("#1=(a b c . #1#)", l)

        p = Pair(Symbol("a"))
        p.cdr = p
        self.writeEquals("#1=(a . #1#)", p)

        p = Pair(Symbol("a"))
        p.car = p
        self.writeEquals("#1=(#1#)", p)

    def testSharedTail(self):
        tail = make_list(2, 3)
        self.writeEquals("((1 . #1=(2 3)) #1#)", [Pair(1, tail), tail])

        # A tail that loops back into the middle of the list.
        l = make_list(1, 2, 3)
        l.cdr.cdr.cdr = l.cdr
        self.writeEquals("(1 . #1=(2 3 . #1#))", l)

    def testCircularLists(self):
        a = [1, 2]
        a.append(a)
        self.writeEquals("#1=(1 2 #1#)", a)

        t = ([],)
        t[0].append(t)
        self.writeEquals("#1=#((#1#))", t)

    def testLabelOrder(self):
        p = [Symbol("p")]
        q = [Symbol("q")]
        self.writeEquals("(#2=(q) #1=(p) #1# #2#)", [q, p, p, q])
        self.writeEquals("(#1=(p) #2=(q) #1# #2#)", [p, q, p, q])

    def testAtomsAndEmptyContainers(self):
        e = []
        s = "str"
        self.writeEquals("(() () \"str\" \"str\")", [e, e, s, s])
        self.writeEquals("(#() #())", [(), ()])

    def testDeepSharing(self):
        x = [1]
        y = [x, x]
        # x is found to be shared before y is.
        self.writeEquals("(#2=(#1=(1) #1#) #2#)", [y, y])

if __name__ == "__main__":
    unittest.main()
