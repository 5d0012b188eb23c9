import sys
import os
import json
import logging

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.markdown import Markdown
from rich.panel import Panel
from rich.prompt import Prompt
from rich.theme import Theme

from storyloom.config import load_config, write_default_config
from storyloom.engine import GameEngine
from storyloom.errors import StoryloomError
from storyloom.loader import load_world
from storyloom.player import GameState

CONFIG_PATH = "config.yaml"
WORLDS_DIR = "stories/worlds"

# 1. SETUP THEME
custom_theme = Theme({
    "info": "bold #b0d8e3",       # Pale Cyan
    "text": "default",
    "dim": "dim",
    "warning": "bold #ffafaf",    # Soft red
    "success": "bold #a3be8c",    # Soft green
})

console = Console(theme=custom_theme)


def clear_screen():
    os.system('cls' if os.name == 'nt' else 'clear')


def setup_logging(level):
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def read_config():
    if not os.path.exists(CONFIG_PATH):
        write_default_config(CONFIG_PATH)
    return load_config(CONFIG_PATH)


def available_worlds():
    if not os.path.isdir(WORLDS_DIR):
        return []
    return sorted(os.path.join(WORLDS_DIR, f) for f in os.listdir(WORLDS_DIR) if f.endswith(".yaml"))


def show_welcome_screen(config):
    clear_screen()
    welcome_md = Markdown("""
    # STORYLOOM

    A parser engine for interactive fiction.

    > *Type what you want to do.*
    """)
    console.print(Panel(welcome_md, border_style="info", padding=(1, 2), width=60))
    console.print("\n[dim]Select an option:[/dim]\n")

    debug_state = "On" if config.get('debug_mode', False) else "Off"
    menu_options = [
        ("1", f"Play: {config.get('world')}"),
        ("2", "Choose another world"),
        ("D", f"Toggle Debug Mode (current: {debug_state})"),
        ("3", "Quit"),
    ]
    for key, label in menu_options:
        console.print(f" [[info]{key}[/info]] {label}")
    print()
    return Prompt.ask(" >", choices=["1", "2", "3", "D", "d"], default="1")


def choose_world(config):
    worlds = available_worlds()
    if not worlds:
        console.print(f"\n[warning]No worlds found in {WORLDS_DIR}.[/]")
        return
    for i, path in enumerate(worlds, 1):
        console.print(f" [[info]{i}[/info]] {path}")
    choice = Prompt.ask(" >", choices=[str(i) for i in range(1, len(worlds) + 1)], default="1")
    config['world'] = worlds[int(choice) - 1]


def toggle_debug(config):
    config['debug_mode'] = not config.get('debug_mode', False)
    with open(CONFIG_PATH, "w") as f:
        yaml.dump(config, f, default_flow_style=False)
    console.print(Panel(f"[info]DEBUG MODE:[/][bold]{' ON' if config['debug_mode'] else ' OFF'}[/bold]",
                        border_style="info"))


# ============================================
# RENDERING
# ============================================
def render(response, is_debug=False):
    message = escape(response["message"])
    boldable = response.get("boldable_text")
    if boldable and escape(boldable) in message:
        message = message.replace(escape(boldable), f"[bold]{escape(boldable)}[/bold]", 1)

    border = "warning" if response["type"] == "quit" else "info"
    console.print(Panel(message, border_style=border))

    if response["game_state"] == GameState.PLAYING and response["valid_directions"]:
        console.print(f"[dim]Exits: {', '.join(response['valid_directions'])}[/dim]")
    if is_debug:
        console.print(Panel(f"[dim]{json.dumps(response, indent=2)}[/dim]", title="[DEBUG: Engine Output]",
                            border_style="dim"))


# ============================================
# GAME LOOP
# ============================================
def start_game(config):
    clear_screen()
    world_path = config.get('world')
    try:
        game_map = load_world(world_path)
    except FileNotFoundError as e:
        console.print(Panel(f"[warning]ERROR: World file not found.[/] Missing file: {e}", border_style="warning"))
        return
    except yaml.YAMLError as e:
        console.print(Panel(f"[warning]YAML STRUCTURE ERROR:[/]\nCheck the world file for indentation or syntax errors.\nDetails: {e}",
                            border_style="warning"))
        return
    except StoryloomError as e:
        console.print(Panel(f"[warning]WORLD ERROR:[/]\n{e}", border_style="warning"))
        return

    engine = GameEngine(game_map, skip_intro=config.get('skip_intro', False))
    session_id = config.get('session_id', 'local')
    is_debug = config.get('debug_mode', False)

    console.print(Panel(f"[bold blue]{game_map.title}[/bold blue]", title="STORY STARTED", border_style="info"))
    if config.get('skip_intro', False):
        render(engine.process_command(session_id, "look"), is_debug)
    else:
        console.print(f"\n{engine.responses.text('have_you_played')}")
    console.print("[dim]Type 'quit' to leave the story.[/dim]\n")

    while True:
        user_input = Prompt.ask("[info]>[/info]")
        response = engine.process_command(session_id, user_input)
        render(response, is_debug)
        if response["type"] == "quit":
            break

    engine.cleanup_session(session_id)


# ============================================
# MAIN
# ============================================
def main():
    config = read_config()
    setup_logging(config.get('log_level', 'WARNING'))

    while True:
        choice = show_welcome_screen(config)
        if choice == "1":
            start_game(config)
            Prompt.ask("[dim]Press Enter to return to the menu[/dim]", default="")
        elif choice == "2":
            choose_world(config)
        elif choice.upper() == "D":
            toggle_debug(config)
        elif choice == "3":
            console.print("\nGoodbye.")
            sys.exit()


if __name__ == "__main__":
    main()
