DEFAULT_HELP_MESSAGE = """Type short commands to act in the world. Some useful ones:
  look (l), look at <thing>, inventory (i)
  take <item>, drop <item>, put <item> in/on <thing>
  open <thing>, unlock <thing> with <key>
  north/south/east/west/up/down (n/s/e/w/u/d), go <direction>
  hint, info, restart, quit
Chain commands with "then", e.g. "take key then north"."""

DEFAULT_INFO_MESSAGE = "A small interactive fiction, told one command at a time."

DEFAULT_TEXTS = {
    # Movement
    'cant_go_that_way': "You can't go that way.",
    'direction_not_understood': "'{direction}' is not a direction I understand.",
    'go_where': "Which direction do you want to go?",
    # Look
    'look_not_present': "You don't see a {name} here.",
    'look_nothing_special': "You see nothing special about the {name}.",
    # Take
    'take_what': "Take what?",
    'take_success': "Taken.",
    'take_nothing_here': "There's nothing here to take.",
    'take_need_to_specify': "You'll need to be more specific about what you want to take.",
    'take_already_have': "You already have that.",
    'take_all_success': "Taken.",
    'take_container_closed': "The {container} is closed.",
    # Drop
    'drop_what': "Drop what?",
    'drop_success': "Dropped.",
    'drop_nothing_carried': "You're not carrying anything.",
    'drop_need_to_specify': "You'll need to be more specific about what you want to drop.",
    'drop_dont_have': "You're not carrying a '{name}'.",
    'drop_all_success': "Dropped.",
    # Put
    'put_what': "Put what?",
    'put_where': "Where do you want to put the {item}?",
    'put_success': "Done.",
    'put_item_not_present': "You don't have a {item} and there isn't one here.",
    'put_container_not_found': "You don't see a {container} here.",
    'put_not_a_container': "The {container} isn't something you can put things in or on.",
    'put_not_allowed': "The {container} won't hold a {item}.",
    'put_container_full': "The {container} is full.",
    'put_container_closed': "The {container} is closed.",
    'put_item_enclosed': "You can't get at it while the {container} is closed.",
    'put_circular': "You can't put something inside itself.",
    'put_missing_preposition': "What do you want to do with the {item}?",
    'put_unsupported_preposition': "You can only put things 'in' or 'on' other things, not '{preposition}'.",
    'put_invalid_preposition': "You can only put things {preposition} the {container}.",
    # Openables
    'unlock_nothing': "There's nothing here that needs unlocking.",
    'unlock_cant': "The {name} isn't something you can unlock.",
    'unlock_need_to_specify': "Which {name} do you want to unlock?",
    'open_nothing': "There's nothing here to open.",
    'open_cant': "The {name} isn't something you can open.",
    'open_need_to_specify': "Which {name} do you want to open?",
    # Scenery interactions
    'climb_what': "Climb what?",
    'climb_cant': "That's not something you can climb.",
    'climb_not_present': "There's nothing here to climb.",
    'punch_what': "Punch what?",
    'punch_cant': "Punching the {name} won't accomplish anything.",
    'punch_not_present': "There's nothing here to punch.",
    'kick_what': "Kick what?",
    'kick_cant': "Kicking the {name} won't accomplish anything.",
    'kick_not_present': "There's nothing here to kick.",
    'drink_what': "Drink what?",
    'drink_cant': "The {name} isn't something you can drink.",
    'drink_not_present': "There's nothing here to drink.",
    'swim_what': "Swim where?",
    'swim_cant': "You can't swim in the {name}.",
    'swim_not_present': "There's nothing here to swim in.",
    'read_what': "Read what?",
    'read_cant': "There's nothing written on the {name}.",
    'read_not_present': "There's nothing here to read.",
    'eat_what': "Eat what?",
    'eat_nothing': "There's nothing here to eat.",
    'eat_dont_have': "You don't have a '{name}' to eat.",
    'eat_not_edible': "That's not something you can eat.",
    'eat_success': "Eaten.",
    # Inventory
    'inventory_empty': "You're not carrying anything.",
    'inventory': "You are carrying:\n{items}",
    # General
    'not_understood': "I don't understand '{command}'.",
    'verb_preposition_invalid': "That doesn't make sense.",
    'item_not_present': "You don't see a '{name}' here.",
    'internal_error': "Something went wrong. Try that another way.",
    'code_nothing_waiting': "There's nothing waiting for a code any more. Carry on.",
    'help': DEFAULT_HELP_MESSAGE,
    'info': DEFAULT_INFO_MESSAGE,
    'no_hints': "There are no hints for this story.",
    # Prompts
    'quit_confirmation': "Are you sure you want to quit?",
    'quit_cancelled': "Okay, continuing.",
    'restart_confirmation': "Are you sure you want to restart?",
    'restart_cancelled': "Okay, continuing.",
    'please_answer': "Please answer the question.",
    'answer_yes_or_no': "Please answer yes or no.",
    'have_you_played': "Have you played interactive fiction before?",
    'new_player_intro': ("Welcome! You move around with directions like 'north' or 'n', "
                         "and act with short commands like 'take lamp'. Type 'help' at any time."),
    'experienced_player_intro': "Welcome back. Type 'help' for the command list.",
    'restart_message': "The story begins again.",
}


class ResponseProvider:
    """
    Keyed text templates for everything the engine says.
    Pass ``overrides`` (or subclass and replace ``text``) to reword it.
    """
    def __init__(self, overrides=None):
        self.texts = dict(DEFAULT_TEXTS)
        self.texts.update(overrides or {})

    def text(self, key, **values):
        template = self.texts.get(key)
        if template is None:
            raise KeyError(f"No response text for '{key}'")
        return template.format(**values) if values else template
