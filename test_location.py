import unittest

from storyloom.engine import GameEngine
from storyloom.entities import Item
from storyloom.formatting import describe_location, format_location_items
from storyloom.location import Location, OpenableLocation
from storyloom.openables import KeyLock
from storyloom.world import GameMap

REVEAL_TEXT = "There's a key under the table."


class TestHiddenItems(unittest.TestCase):
    def setUp(self):
        self.game_map = GameMap('Kitchen')
        self.kitchen = Location('kitchen', 'A cluttered kitchen.')
        self.game_map.add_location(self.kitchen)
        self.key = Item('key')
        self.game_map.place_hidden_item(self.key, self.kitchen, REVEAL_TEXT)
        self.engine = GameEngine(self.game_map, skip_intro=True)

    def test_hidden_until_revealed(self):
        self.assertTrue(self.kitchen.is_item_hidden_by_name('key'))
        self.assertTrue(self.kitchen.is_item_hidden(self.key))
        self.assertNotIn(self.key, self.kitchen.items)
        self.assertIsNone(self.kitchen.get_item_by_name('key'))

        response = self.engine.process_command('s1', 'take key')
        self.assertEqual(response['message'], "You don't see a 'key' here.")
        self.assertFalse(self.engine.get_player('s1').has_item('key'))

    def test_reveal_take_drop(self):
        self.assertTrue(self.kitchen.reveal_hidden_item_by_name('key'))
        self.assertFalse(self.kitchen.is_item_hidden_by_name('key'))
        self.assertIn(self.key, self.kitchen.items)
        self.assertEqual(self.kitchen.item_description(self.key), REVEAL_TEXT)
        self.assertEqual(format_location_items(self.kitchen), REVEAL_TEXT)

        self.assertEqual(self.engine.process_command('s1', 'take key')['message'], "Taken.")
        self.assertEqual(self.engine.process_command('s1', 'drop key')['message'], "Dropped.")
        self.assertEqual(self.kitchen.item_description(self.key), "There is a key here.")
        self.assertIsNone(self.kitchen.get_revealed_location_description(self.key))

    def test_reveal_twice(self):
        self.assertTrue(self.kitchen.reveal_hidden_item_by_name('key'))
        self.assertFalse(self.kitchen.reveal_hidden_item_by_name('key'))
        self.assertFalse(self.kitchen.reveal_hidden_item_by_name('spoon'))

    def test_reset_hides_again(self):
        self.kitchen.reveal_hidden_item_by_name('key')
        self.engine.process_command('s1', 'take key')
        self.game_map.reset_map()
        self.assertTrue(self.kitchen.is_item_hidden_by_name('key'))


class TestLocation(unittest.TestCase):
    def test_directions_sorted(self):
        hall = Location('hall', 'A hall.')
        hall.connect('west', Location('study', 'A study.'))
        hall.connect('east', Location('porch', 'A porch.'))
        self.assertEqual(hall.available_directions(), ['east', 'west'])
        hall.disconnect('west')
        self.assertEqual(hall.available_directions(), ['east'])

    def test_listing_order(self):
        hall = Location('hall', 'A hall.')
        hall.add_item(Item('lamp', location_description="A lamp glows."))
        self.assertEqual(describe_location(hall), "A hall.\n\nA lamp glows.")
        self.assertEqual(describe_location(Location('attic', 'Dusty.', 'The attic.'), long=False), "The attic.")

    def test_openable_location_descriptions(self):
        vault = OpenableLocation('vault', 'A sealed vault.', lock=KeyLock('key'), targets=['door'],
                                 descriptions={'unlocked_long': 'The vault door is unlocked.',
                                               'open_long': 'The vault door stands open.'})
        self.assertEqual(vault.get_long_description(), 'A sealed vault.')
        vault.unlocked = True
        self.assertEqual(vault.get_long_description(), 'The vault door is unlocked.')
        vault.opened = True
        self.assertEqual(vault.get_long_description(), 'The vault door stands open.')
        self.assertEqual(vault.get_short_description(), 'A sealed vault.')


if __name__ == '__main__':
    unittest.main()
