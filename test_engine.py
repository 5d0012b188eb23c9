import unittest

from storyloom.engine import GameEngine, IntroResult
from storyloom.loader import build_world
from storyloom.player import GameState

UNLOCK_MESSAGE = "The vault door clicks and swings loose."


def vault_world():
    return build_world({
        'title': 'Vault',
        'locations': [
            {'id': 'key-room', 'description': 'A small bare room.',
             'exits': {'north': 'vault-room'},
             'items': [{'name': 'key'}, {'name': 'apple', 'edible': True}]},
            {'id': 'vault-room', 'description': 'A round vault antechamber.',
             'openable': {'key': 'key', 'targets': ['door'],
                          'messages': {'unlock_success': UNLOCK_MESSAGE}},
             'items': [{'name': 'safe', 'openable': {'code': '1234'}}]},
        ],
    })


def storeroom_world():
    return build_world({
        'title': 'Storeroom',
        'locations': [
            {'id': 'store-room', 'description': 'A dusty storeroom.',
             'exits': {'east': 'closet'},
             'scenery': [{'name': 'cabinet', 'container': {'prepositions': ['in']}, 'openable': {},
                          'contents': [{'name': 'coin'}]}],
             'items': [{'name': 'bag', 'container': {}},
                       {'name': 'chest', 'container': {}, 'openable': {},
                        'contents': [{'name': 'gem'}, {'name': 'pouch', 'container': {}}]}],
             'hidden_items': [{'item': {'name': 'ring'}, 'reveal': 'A ring glints in the dust.'}]},
            {'id': 'closet', 'description': 'A narrow closet.',
             'scenery': [{'name': 'cupboard', 'container': {'prepositions': ['in']}, 'openable': {},
                          'contents': [{'name': 'hat'}]}],
             'items': [{'name': 'scarf'}]},
        ],
    })


class EngineTestCase(unittest.TestCase):
    skip_intro = True

    def setUp(self):
        self.game_map = vault_world()
        self.engine = GameEngine(self.game_map, skip_intro=self.skip_intro)

    def send(self, text, session='s1'):
        return self.engine.process_command(session, text)

    def player(self, session='s1'):
        return self.engine.get_player(session)


class TestIntro(EngineTestCase):
    skip_intro = False

    def test_only_yes_or_no_leaves_start(self):
        response = self.send("take key")
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_START_ANSWER)
        self.assertTrue(response['message'].startswith("Please answer the question."))
        self.assertEqual(self.player().inventory, [])

    def test_yes(self):
        response = self.send("Yes")
        self.assertEqual(response['game_state'], GameState.PLAYING)
        self.assertTrue(self.player().experienced)
        self.assertEqual(response['boldable_text'], 'A small bare room.')
        self.assertIn('A small bare room.', response['message'])

    def test_no(self):
        response = self.send("no thanks")
        self.assertEqual(response['game_state'], GameState.PLAYING)
        self.assertFalse(self.player().experienced)
        self.assertTrue(response['message'].startswith("Welcome!"))

    def test_intro_handler(self):
        def intro(player, text, game_map):
            if text == "ready":
                return IntroResult.playing("Off you go.")
            return IntroResult.waiting("Say 'ready'.")

        engine = GameEngine(vault_world(), intro_handler=intro)
        self.assertEqual(engine.process_command('s1', 'yes')['message'], "Say 'ready'.")
        response = engine.process_command('s1', 'ready')
        self.assertEqual(response['message'], "Off you go.")
        self.assertEqual(response['game_state'], GameState.PLAYING)


class TestPlay(EngineTestCase):
    def test_response_shape(self):
        response = self.send("look")
        self.assertEqual(set(response), {'type', 'message', 'boldable_text', 'game_state', 'valid_directions'})
        self.assertEqual(response['type'], 'response')
        self.assertEqual(response['boldable_text'], 'A small bare room.')
        self.assertEqual(response['valid_directions'], ['north'])

    def test_unlock_vault(self):
        self.send("take key")
        moved = self.send("north")
        self.assertEqual(moved['boldable_text'], 'A round vault antechamber.')
        self.assertEqual(moved['valid_directions'], ['south'])

        response = self.send("unlock door")
        self.assertEqual(response['message'], UNLOCK_MESSAGE)
        self.assertEqual(self.player().current_location.name, 'vault-room')
        self.assertTrue(self.player().has_item('key'))

    def test_movement_errors(self):
        self.assertEqual(self.send("west")['message'], "You can't go that way.")
        self.assertEqual(self.send("go sideways")['message'], "'sideways' is not a direction I understand.")
        self.assertEqual(self.send("go")['message'], "Which direction do you want to go?")

    def test_not_understood(self):
        self.assertEqual(self.send("dance wildly")['message'], "I don't understand 'dance wildly'.")

    def test_bad_preposition(self):
        self.send("take key")
        self.assertEqual(self.send("put key with apple")['message'], "That doesn't make sense.")

    def test_pronoun_uses_last_object(self):
        self.send("examine key")
        self.assertEqual(self.send("take it")['message'], "Taken.")
        self.assertTrue(self.player().has_item('key'))
        self.assertFalse(self.player().has_item('apple'))

    def test_take_all_and_inventory(self):
        self.send("take all")
        self.assertEqual(self.send("i")['message'], "You are carrying:\nA key\nA apple")
        self.assertEqual(self.send("eat apple")['message'], "Eaten.")
        self.assertFalse(self.player().has_item('apple'))

    def test_sequence(self):
        response = self.send("take key then north then unlock door")
        self.assertEqual(response['message'].split("\n\n")[0], "Taken.")
        self.assertTrue(response['message'].endswith(UNLOCK_MESSAGE))
        self.assertEqual(self.player().current_location.name, 'vault-room')

    def test_sequence_echo_keeps_casing(self):
        response = self.send("look then Dance Wildly")
        self.assertEqual(response['message'].split("\n\n")[-1], "I don't understand 'Dance Wildly'.")

    def test_sequence_stops_at_prompt(self):
        response = self.send("quit then take key")
        self.assertEqual(response['message'], "Are you sure you want to quit?")
        self.assertEqual(self.player().inventory, [])

    def test_hint_without_phases(self):
        self.assertEqual(self.send("hint")['message'], "There are no hints for this story.")


class TestClosedContainers(EngineTestCase):
    def setUp(self):
        self.game_map = storeroom_world()
        self.engine = GameEngine(self.game_map, skip_intro=True)
        self.room = self.game_map.get_location('store-room')

    def test_closed_contents_not_listed(self):
        message = self.send("look")['message']
        self.assertIn("There is a chest here.", message)
        for name in ('coin', 'gem', 'pouch'):
            self.assertNotIn(f"a {name}", message)
        self.assertEqual(self.send("look cabinet")['message'], "You see nothing special about the cabinet.")

    def test_take_named_from_closed_containers(self):
        self.assertEqual(self.send("take coin")['message'], "The cabinet is closed.")
        self.assertEqual(self.send("take gem")['message'], "The chest is closed.")
        self.assertEqual(self.player().inventory, [])

    def test_take_all_leaves_closed_contents(self):
        self.assertEqual(self.send("take all")['message'], "Taken.")
        player = self.player()
        self.assertFalse(player.has_item('coin'))
        self.assertTrue(self.room.is_item_in_container(self.room.get_item_by_name('coin')))
        # the chest travels with what is shut inside it
        self.assertTrue(player.has_item('chest'))
        self.assertTrue(player.has_item('gem'))
        chest = player.get_inventory_item('chest')
        self.assertTrue(chest.contains_item('gem'))
        self.assertIs(player.get_container_for_item(player.get_inventory_item('gem')), chest)

    def test_implied_take_skips_closed_contents(self):
        self.send("east")
        self.assertEqual(self.send("take")['message'], "Taken.")
        self.assertTrue(self.player().has_item('scarf'))
        self.assertFalse(self.player().has_item('hat'))

    def test_put_respects_closed_chest(self):
        response = self.send("put gem in bag")
        self.assertEqual(response['message'], "You can't get at it while the chest is closed.")
        chest = self.room.get_item_by_name('chest')
        self.assertTrue(chest.contains_item('gem'))
        self.assertFalse(chest.opened)

        self.send("take bag")
        self.assertEqual(self.send("put bag in pouch")['message'], "The chest is closed.")
        self.assertTrue(self.player().has_item('bag'))

    def test_opening_gives_access(self):
        self.send("open cabinet")
        self.assertIn("a coin", self.send("look")['message'].lower())
        self.assertEqual(self.send("take coin")['message'], "Taken.")
        self.assertTrue(self.player().has_item('coin'))


class TestCodePrompt(EngineTestCase):
    def setUp(self):
        super().setUp()
        self.send("north")

    def test_wrong_code(self):
        response = self.send("open safe")
        self.assertEqual(response['message'], "The safe needs a code. What do you enter?")
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_OPEN_CODE)

        response = self.send("0000")
        self.assertEqual(response['message'], "Nothing happens. That must be the wrong code.")
        self.assertEqual(response['game_state'], GameState.PLAYING)
        self.assertIsNone(self.player().pending_target)

    def test_open_with_code(self):
        self.send("open safe")
        response = self.send("1234")
        self.assertEqual(response['message'], "You unlock the safe and open it.")
        safe = self.player().current_location.get_item_by_name('safe')
        self.assertTrue(safe.opened)

    def test_unlock_with_code(self):
        self.assertEqual(self.send("unlock safe")['game_state'], GameState.WAITING_FOR_UNLOCK_CODE)
        self.assertEqual(self.send("1234")['message'], "You unlock the safe.")

    def test_code_given_inline(self):
        response = self.send("unlock safe with 1234")
        self.assertEqual(response['message'], "You unlock the safe.")
        self.assertEqual(response['game_state'], GameState.PLAYING)

    def test_code_prompt_without_target(self):
        player = self.player()
        player.game_state = GameState.WAITING_FOR_OPEN_CODE
        response = self.send("south")
        self.assertEqual(response['message'], "There's nothing waiting for a code any more. Carry on.")
        self.assertEqual(response['game_state'], GameState.PLAYING)
        self.assertEqual(player.current_location.name, 'vault-room')



class TestQuitAndRestart(EngineTestCase):
    def test_quit_cancelled(self):
        self.send("quit")
        response = self.send("perhaps")
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_QUIT_CONFIRMATION)
        self.assertTrue(response['message'].startswith("Please answer yes or no."))
        response = self.send("no")
        self.assertEqual(response['message'], "Okay, continuing.")
        self.assertEqual(response['game_state'], GameState.PLAYING)

    def test_quit_confirmed(self):
        self.send("take key")
        self.send("q")
        response = self.send("yes")
        self.assertEqual(response['type'], 'quit')
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_START_ANSWER)
        self.assertEqual(self.player().inventory, [])

    def test_restart(self):
        self.send("take key then north then unlock door")
        response = self.send("restart")
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_RESTART_CONFIRMATION)
        response = self.send("y")
        self.assertTrue(response['message'].startswith("The story begins again."))
        self.assertEqual(response['game_state'], GameState.PLAYING)

        key_room = self.game_map.get_location('key-room')
        self.assertIs(self.player().current_location, key_room)
        self.assertEqual(self.player().inventory, [])
        self.assertIsNotNone(key_room.get_item_by_name('key'))
        self.assertFalse(self.game_map.get_location('vault-room').unlocked)

    def test_restart_needs_yes_or_no(self):
        self.send("take key")
        self.send("restart")
        response = self.send("look")
        self.assertEqual(response['game_state'], GameState.WAITING_FOR_RESTART_CONFIRMATION)
        self.assertTrue(response['message'].startswith("Please answer yes or no."))
        self.assertTrue(self.player().has_item('key'))

    def test_restart_cancelled(self):
        self.send("take key")
        self.send("restart")
        response = self.send("no")
        self.assertEqual(response['message'], "Okay, continuing.")
        self.assertEqual(response['game_state'], GameState.PLAYING)
        self.assertTrue(self.player().has_item('key'))


class TestCustomCommands(EngineTestCase):
    def test_custom_verb_with_alias(self):
        self.engine.register_command('xyzzy', lambda player, command, ctx: "Nothing happens.", aliases=['plugh'])
        self.assertEqual(self.send("plugh")['message'], "Nothing happens.")

    def test_override_can_fall_back(self):
        self.engine.register_command('look', lambda player, command, ctx: None)
        self.assertIn('A small bare room.', self.send("look")['message'])

    def test_context_helpers(self):
        def stash(player, command, ctx):
            result = ctx.put_item_in_container('key', 'bag')
            return result['message']

        self.engine.register_command('stash', stash)
        self.assertEqual(self.send("stash")['message'], "You don't see a bag here.")

    def test_context_container_queries(self):
        engine = GameEngine(storeroom_world(), skip_intro=True)

        def check(player, command, ctx):
            chest = ctx.current_location.get_item_by_name('chest')
            answers = (
                ctx.is_item_in_container('gem'),
                ctx.is_item_in_container('gem', 'chest'),
                ctx.is_item_in_container('gem', chest),
                ctx.is_item_in_container('gem', 'bag'),
                ctx.is_item_in_container('bag'),
                ctx.is_item_in_container('unicorn', 'chest'),
            )
            return " ".join(str(a) for a in answers)

        engine.register_command('check', check)
        self.assertEqual(engine.process_command('s1', 'check')['message'], "True True True False False False")

    def test_context_reveals_hidden_item(self):
        engine = GameEngine(storeroom_world(), skip_intro=True)
        engine.register_command('search',
                                lambda player, command, ctx: "Found." if ctx.reveal_hidden_item('ring') else "Nothing.")
        room = engine.game_map.get_location('store-room')
        self.assertIsNone(room.get_item_by_name('ring'))

        response = engine.process_command('s1', 'search')
        self.assertEqual(response['message'], "Found.")
        self.assertIsNotNone(room.get_item_by_name('ring'))
        self.assertIn("A ring glints in the dust.", engine.process_command('s1', 'look')['message'])
        self.assertEqual(engine.process_command('s1', 'search')['message'], "Nothing.")

    def test_handler_failure_is_contained(self):
        def broken(player, command, ctx):
            raise RuntimeError("boom")

        self.engine.register_command('dance', broken)
        with self.assertLogs('storyloom.engine', level='ERROR'):
            response = self.send("dance")
        self.assertEqual(response['message'], "Something went wrong. Try that another way.")
        self.assertEqual(response['game_state'], GameState.PLAYING)


class TestSessions(EngineTestCase):
    skip_intro = False

    def test_sessions_are_independent(self):
        self.send("yes", session='a')
        self.assertEqual(self.player('a').game_state, GameState.PLAYING)
        self.assertEqual(self.send("look", session='b')['game_state'], GameState.WAITING_FOR_START_ANSWER)

    def test_cleanup(self):
        self.send("yes", session='a')
        self.engine.cleanup_session('a')
        self.assertIsNone(self.player('a'))
        self.assertEqual(self.send("look", session='a')['game_state'], GameState.WAITING_FOR_START_ANSWER)


if __name__ == '__main__':
    unittest.main()
