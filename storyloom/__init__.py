from storyloom.engine import GameEngine, IntroResult
from storyloom.errors import StoryloomError, WorldDefinitionError, ConfigError, UnknownVerbError
from storyloom.loader import load_world, build_world
from storyloom.parser import CommandParser, ParsedCommand
from storyloom.player import GameState, Player
from storyloom.responses import ResponseProvider
from storyloom.world import GameMap

__version__ = "0.1.0"
