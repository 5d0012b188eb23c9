from storyloom.handlers.items import (TakeHandler, DropHandler, PutHandler,
                                      InventoryHandler, EatHandler)
from storyloom.handlers.look import LookHandler
from storyloom.handlers.movement import MovementHandler
from storyloom.handlers.openables import OpenHandler, UnlockHandler
from storyloom.handlers.scenery import SceneryInteractionHandler
from storyloom.handlers.system import HelpHandler, HintHandler

DEFAULT_HANDLERS = (
    MovementHandler, LookHandler, TakeHandler, DropHandler, PutHandler,
    InventoryHandler, EatHandler, OpenHandler, UnlockHandler,
    SceneryInteractionHandler, HelpHandler, HintHandler,
)


def build_default_handlers(resolver, context, responses, game_map):
    return [cls(resolver, context, responses, game_map) for cls in DEFAULT_HANDLERS]
