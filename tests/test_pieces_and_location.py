import dataclasses
import unittest

from gridboard_core.location import Location
from gridboard_core.pieces import Color, Piece, Pieces, colored


class TestLocation(unittest.TestCase):
    def test_given_two_equal_locations_when_comparing_then_equal_and_same_hash(self):
        a = Location(2, 5)
        b = Location(2, 5)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, Location(5, 2))
        self.assertEqual(len({a, b, Location(1, 1)}), 2)

    def test_given_location_when_formatting_and_unpacking_then_x_then_y(self):
        loc = Location(3, 7)
        self.assertEqual(str(loc), "(3,7)")
        x, y = loc
        self.assertEqual((x, y), (3, 7))

    def test_given_location_when_assigning_then_frozen(self):
        loc = Location(1, 1)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            loc.x = 2  # type: ignore[misc]


class TestPieces(unittest.TestCase):
    def test_given_shared_markers_when_inspecting_then_only_stones_have_color(self):
        self.assertFalse(Pieces.EMPTY.has_color)
        self.assertFalse(Pieces.GUARD.has_color)
        self.assertTrue(Pieces.BLACK.has_color)
        self.assertTrue(Pieces.WHITE.has_color)
        self.assertEqual(Pieces.BLACK.color, Color(255, 128, 128, 128))
        self.assertEqual(Pieces.WHITE.color.hex, "#ffffff")
        self.assertEqual(Pieces.BLACK.color.hex, "#808080")
        self.assertTrue(Pieces.EMPTY.is_empty)
        self.assertTrue(Pieces.GUARD.is_guard)

    def test_given_invalid_color_combination_when_constructing_then_value_error(self):
        with self.assertRaises(ValueError):
            Piece('empty', Color(255, 0, 0, 0))
        with self.assertRaises(ValueError):
            Piece('guard', Color(255, 0, 0, 0))
        with self.assertRaises(ValueError):
            Piece('red')
        with self.assertRaises(ValueError):
            Piece('')

    def test_given_pieces_when_matching_kind_then_instance_does_not_matter(self):
        dark = Piece('black', Color(255, 10, 10, 10))
        self.assertTrue(dark.same_kind(Pieces.BLACK))
        self.assertNotEqual(dark, Pieces.BLACK)
        self.assertFalse(Pieces.WHITE.same_kind(Pieces.BLACK))
        self.assertTrue(Piece('empty').same_kind(Pieces.EMPTY))

    def test_given_custom_kind_when_building_with_colored_then_colorable_variant(self):
        red = colored('red', Color(255, 255, 0, 0))
        self.assertTrue(red.has_color)
        self.assertEqual(red.color.hex, "#ff0000")
        self.assertEqual(str(red), "red")
        with self.assertRaises(dataclasses.FrozenInstanceError):
            red.kind = 'blue'  # type: ignore[misc]

    def test_given_kind_name_when_looking_up_then_shared_marker_or_error(self):
        self.assertIs(Pieces.by_kind("White "), Pieces.WHITE)
        self.assertIs(Pieces.by_kind("BLACK"), Pieces.BLACK)
        with self.assertRaises(ValueError):
            Pieces.by_kind("purple")


if __name__ == '__main__':
    unittest.main(verbosity=2)
