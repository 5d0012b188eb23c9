from storyloom.containers import Holder


class GameState:
    PLAYING = 'PLAYING'
    WAITING_FOR_START_ANSWER = 'WAITING_FOR_START_ANSWER'
    WAITING_FOR_QUIT_CONFIRMATION = 'WAITING_FOR_QUIT_CONFIRMATION'
    WAITING_FOR_RESTART_CONFIRMATION = 'WAITING_FOR_RESTART_CONFIRMATION'
    WAITING_FOR_UNLOCK_CODE = 'WAITING_FOR_UNLOCK_CODE'
    WAITING_FOR_OPEN_CODE = 'WAITING_FOR_OPEN_CODE'


class Player(Holder):
    def __init__(self, start_location, session_id=None):
        self._init_holder()
        self.session_id = session_id
        self.current_location = start_location
        self.inventory = []
        self.game_state = GameState.WAITING_FOR_START_ANSWER
        self.experienced = False
        self.hint_counts = {}
        self.last_hint_phase = None
        self.pending_target = None

    def reset(self, start_location):
        self.current_location = start_location
        self.inventory = []
        self.clear_containment()
        self.game_state = GameState.PLAYING
        self.hint_counts = {}
        self.last_hint_phase = None
        self.pending_target = None

    # --- INVENTORY ---
    def holds(self, item):
        return item in self.inventory

    def add_item(self, item):
        if item not in self.inventory:
            self.inventory.append(item)

    def remove_item(self, item, release=True):
        if item not in self.inventory:
            return False
        self._drop_relation(item, release)
        self.inventory.remove(item)
        return True

    def get_inventory_item(self, name):
        for item in self.inventory:
            if item.matches_name(name):
                return item
        return None

    def has_item(self, name):
        return self.get_inventory_item(name) is not None

    def formatted_inventory(self):
        lines = []
        for item in self.inventory:
            line = item.inventory_description
            container = self.containment.get(item)
            if container is not None:
                line += f" - in {container.name}"
            lines.append(line)
        return "\n".join(lines)
