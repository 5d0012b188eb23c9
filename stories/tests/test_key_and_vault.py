import unittest
import sys
import os

# Ensure the project root is on the path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from storyloom.engine import GameEngine
from storyloom.loader import load_world

WORLD_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), '../worlds/key_and_vault.yaml'))


class TestKeyAndVault(unittest.TestCase):
    def setUp(self):
        self.game_map = load_world(WORLD_PATH)
        self.engine = GameEngine(self.game_map, skip_intro=True)

    def play(self, commands):
        print(f"\nTesting Story: {self.game_map.title}")
        response = None
        for cmd in commands:
            print(f"> {cmd}")
            response = self.engine.process_command('tester', cmd)
            print(response['message'])
        return response

    def test_story(self):
        commands = ['look', 'take key', 'take bag', 'take apple', 'put apple in bag', 'inventory',
                    'north', 'unlock door', 'open door', 'north', 'read ledgers',
                    'take gem', 'open chest', '7391', 'take gem',
                    'south', 'south', 'east', 'look', 'take coin', 'take ladder', 'put ladder on wall']
        self.play(commands)

        player = self.engine.get_player('tester')
        courtyard = self.game_map.get_location('courtyard')
        win = {'type': 'location', 'target': 'courtyard'}
        if win and win.get('type') == 'location':
            self.assertEqual(player.current_location.name, win['target'])
        self.assertTrue(player.has_item('gem'))
        self.assertTrue(player.has_item('coin'))
        self.assertTrue(courtyard.get_location_container('wall').contains_item('ladder'))

    def test_gem_locked_away(self):
        self.play(['take key', 'north', 'open door', 'north'])
        self.assertEqual(self.engine.process_command('tester', 'take gem')['message'], "The chest is closed.")
        self.assertNotIn('glittering', self.engine.process_command('tester', 'look')['message'])

    def test_custom_texts(self):
        response = self.play(['take apple', 'inventory'])
        self.assertIn("A red apple", response['message'])
        self.assertEqual(self.engine.process_command('tester', 'west')['message'], "A blank stone wall blocks the way.")
        self.assertEqual(self.engine.process_command('tester', 'kick table')['message'],
                         "You stub your toe. The table does not notice.")
        self.assertEqual(self.engine.process_command('tester', 'take lamp')['message'],
                         "The lamp is bolted to the wall.")

    def test_hints_follow_progress(self):
        first = self.engine.process_command('tester', 'hint')['message']
        second = self.engine.process_command('tester', 'hint')['message']
        third = self.engine.process_command('tester', 'hint')['message']
        self.assertEqual(first, "Have a good look around the antechamber.")
        self.assertEqual(second, "Try 'take key'.")
        self.assertEqual(third, second)

        self.engine.process_command('tester', 'take key')
        self.assertEqual(self.engine.process_command('tester', 'hint')['message'],
                         "The vault lies to the north. Keys open doors.")

    def test_restart_puts_world_back(self):
        self.play(['take key', 'north', 'open door', 'restart', 'yes'])
        vault = self.game_map.get_location('vault-room')
        self.assertFalse(vault.opened)
        self.assertIsNone(vault.get_connection('north'))
        self.assertIsNotNone(self.game_map.get_location('key-room').get_item_by_name('key'))


if __name__ == '__main__':
    unittest.main()
