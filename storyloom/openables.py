DEFAULT_MESSAGES = {
    'unlock_success': "You unlock the {name}.",
    'open_success': "You open the {name}.",
    'unlock_open_success': "You unlock the {name} and open it.",
    'already_unlocked': "The {name} is already unlocked.",
    'already_open': "The {name} is already open.",
    'no_key': "You don't have anything that unlocks the {name}.",
    'locked': "The {name} is locked.",
    'code_prompt': "The {name} needs a code. What do you enter?",
    'wrong_code': "Nothing happens. That must be the wrong code.",
    'no_lock': "The {name} doesn't have a lock.",
}


# ==========================================
# LOCKS
# ==========================================
class KeyLock:
    code_based = False

    def __init__(self, key_name):
        self.key_name = key_name

    def check(self, player, answer):
        """Returns None when the lock yields, otherwise a failure message key."""
        if answer is not None:
            item = player.get_inventory_item(answer)
            if item is None or not item.matches_name(self.key_name):
                return 'no_key'
        if not player.has_item(self.key_name):
            return 'no_key'
        return None


class CodeLock:
    code_based = True

    def __init__(self, code):
        self.code = str(code)

    def check(self, player, answer):
        if answer is None:
            return 'code_prompt'
        if answer.strip().lower() != self.code.lower():
            return 'wrong_code'
        return None


# ==========================================
# OPENABLE CAPABILITY
# ==========================================
class Openable:
    """
    Lock and open/closed state shared by items, scenery and locations.
    Subclasses call ``Openable.__init__`` next to their own base class.
    """
    def __init__(self, lock=None, targets=None, messages=None, opened=False):
        self.lock = lock
        self.unlocked = lock is None
        self.opened = opened
        self._initial_state = (self.unlocked, self.opened)
        self.target_names = [t.lower() for t in (targets or [])]
        self.messages = dict(messages or {})
        self.on_unlock_effects = []
        self.on_open_effects = []

    @property
    def openable_name(self):
        return self.target_names[0] if self.target_names else self.name

    def requires_unlocking(self):
        return self.lock is not None

    def uses_code_based_unlocking(self):
        return self.lock is not None and self.lock.code_based

    def inferred_target_names(self):
        if self.target_names:
            return set(self.target_names)
        return {self.name.lower()} | {a.lower() for a in self.aliases}

    def matches_unlock_target(self, name):
        return bool(name) and name.lower() in self.inferred_target_names()

    def matches_open_target(self, name):
        return bool(name) and name.lower() in self.inferred_target_names()

    def message(self, key):
        template = self.messages.get(key, DEFAULT_MESSAGES[key])
        return template.format(name=self.openable_name)

    def _result(self, success, key):
        return {"success": success, "message": self.message(key)}

    def _run_effects(self, effects, game_map):
        for effect in effects:
            effect(game_map)

    def try_unlock(self, player, answer, game_map):
        if self.lock is None:
            return self._result(False, 'no_lock')
        if self.unlocked:
            return self._result(False, 'already_unlocked')
        failure = self.lock.check(player, answer)
        if failure:
            return self._result(False, failure)
        self.unlocked = True
        self._run_effects(self.on_unlock_effects, game_map)
        return self._result(True, 'unlock_success')

    def try_open(self, player, answer, game_map):
        if self.opened:
            return self._result(False, 'already_open')
        if not self.unlocked:
            failure = self.lock.check(player, answer)
            if failure:
                return self._result(False, 'locked' if failure == 'no_key' else failure)
            self.unlocked = True
            self.opened = True
            self._run_effects(self.on_unlock_effects, game_map)
            self._run_effects(self.on_open_effects, game_map)
            return self._result(True, 'unlock_open_success')
        self.opened = True
        self._run_effects(self.on_open_effects, game_map)
        return self._result(True, 'open_success')

    def reset_openable(self):
        self.unlocked, self.opened = self._initial_state
