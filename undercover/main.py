"""Main entry point for Undercover."""

import asyncio
import sys

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, IntPrompt, Prompt
from rich.table import Table

from .catalog.topics import TopicCatalog, load_catalog
from .communication.markdown_logger import MarkdownLogger
from .config import AppConfig, load_config
from .engine.game import GameEngine
from .engine.phases import GameMode, Player
from .engine.reveal import CardRevealController, RevealState
from .storage.stores import Settings, YamlStore


# Load environment variables
load_dotenv()

console = Console()

SETTING_LABELS = {
    "hints_enabled": "Hint word for the imposter",
    "timed_flip_enabled": "Hide cards automatically",
    "custom_player_names_enabled": "Custom player names",
}


async def ainput(prompt: str = "") -> str:
    """Read a line without blocking the event loop."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, console.input, prompt)


def display_welcome():
    """Display welcome message."""
    console.print(Panel.fit(
        "[bold blue]UNDERCOVER[/bold blue]\n"
        "[dim]Pass the device. One of you doesn't know the card.[/dim]",
        border_style="blue",
    ))
    console.print()


def display_standings(players: list[Player], title: str = "Scoreboard"):
    """Display players ordered by wins."""
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Seat", style="dim")
    table.add_column("Player", style="cyan")
    table.add_column("Wins", style="green", justify="right")

    for player in players:
        table.add_row(str(player.index), player.name, str(player.wins))

    console.print(table)
    console.print()


def display_settings(settings: Settings):
    """Display the current settings flags."""
    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("#", style="dim")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    for i, (name, label) in enumerate(SETTING_LABELS.items(), start=1):
        value = getattr(settings, name)
        table.add_row(str(i), label, "[green]on[/green]" if value else "[red]off[/red]")

    console.print(table)


def edit_settings(store: YamlStore):
    """Toggle settings until the user is done."""
    names = list(SETTING_LABELS)
    while True:
        display_settings(store.get_settings())
        choice = Prompt.ask(
            "Toggle which setting? (Enter to go back)",
            choices=[str(i) for i in range(1, len(names) + 1)] + [""],
            default="",
            show_choices=False,
        )
        if not choice:
            return
        name = names[int(choice) - 1]
        store.set_flag(name, not getattr(store.get_settings(), name))


def run_setup(engine: GameEngine, config: AppConfig, store: YamlStore) -> bool:
    """Setup menu. Returns False when the user quits."""
    console.print("[bold]Main menu[/bold]: [cyan]s[/cyan]tart, se[cyan]t[/cyan]tings, "
                  "reset [cyan]n[/cyan]ames, [cyan]q[/cyan]uit")
    choice = Prompt.ask("Choose", choices=["s", "t", "n", "q"], default="s", show_choices=False)

    if choice == "q":
        return False
    if choice == "t":
        edit_settings(store)
    elif choice == "n":
        engine.reset_names()
        console.print("[dim]Stored names cleared.[/dim]")
    else:
        count = IntPrompt.ask(
            f"How many players? ({config.game.min_players}-{config.game.max_players})",
            default=config.game.player_count,
        )
        count = config.clamp_player_count(count)
        settings = store.get_settings()
        engine.start_round(count, requires_name_entry=settings.custom_player_names_enabled)
    return True


def run_name_entry(engine: GameEngine):
    """Ask each seat for a name."""
    console.print("[bold]Who's playing?[/bold] [dim](leave blank for the default)[/dim]")
    names = []
    for player in engine.players:
        default = player.name if player.name != f"Player {player.index}" else ""
        names.append(Prompt.ask(f"Player {player.index}", default=default, show_default=bool(default)))
    engine.confirm_names(names)


async def reveal_card(controller: CardRevealController):
    """Let one player look at their card and hand the device on."""
    locked = asyncio.Event()

    def on_change(c: CardRevealController):
        if c.state == RevealState.LOCKED:
            locked.set()

    controller.on_change = on_change

    await ainput(f"[bold]{controller.player.name}[/bold], press Enter to see your card ")
    controller.interact()
    console.print(Panel.fit(
        f"[bold]{controller.card_text}[/bold]",
        title="Your card",
        border_style="white",
    ))
    if controller.timed:
        console.print(f"[dim]Hides in {controller.reveal_duration:g} seconds.[/dim]")

    hide = asyncio.ensure_future(ainput("Press Enter to hide "))
    lock = asyncio.ensure_future(locked.wait())
    done, _ = await asyncio.wait({hide, lock}, return_when=asyncio.FIRST_COMPLETED)

    if hide in done:
        controller.interact()
        await lock
    else:
        console.clear()
        console.print("[yellow]Time's up, card hidden.[/yellow] Press Enter to pass the device.")
        await hide

    controller.dispose()
    console.clear()


async def run_distribution(engine: GameEngine, config: AppConfig):
    """Pass the device around until every player has seen their card."""
    loop = asyncio.get_running_loop()
    console.print(Panel.fit(
        "Pass the device around.\nEach player looks at their card exactly once.",
        border_style="blue",
    ))

    for player in engine.players:
        if player.has_seen_role:
            continue
        controller = engine.new_reveal_controller(
            player.id,
            loop,
            reveal_duration=config.game.reveal_seconds,
            lock_delay=config.game.lock_delay_seconds,
        )
        try:
            await reveal_card(controller)
        finally:
            controller.dispose()

    engine.begin_discussion()


async def run_discussion(engine: GameEngine):
    """Discussion prompt and outcome selection."""
    first = engine.first_speaker()
    console.print(Panel(
        "The imposter does NOT know the card. Take turns describing it!\n"
        f"[bold]{first.name if first else 'Anyone'}[/bold] starts.",
        title="Discussion",
        border_style="yellow",
    ))
    await ainput("[yellow]Press Enter to reveal the imposter...[/yellow] ")

    imposter = engine.imposter()
    console.print(f"[bold red]{imposter.name}[/bold red] was the imposter! "
                  f"The card was [bold]{engine.state.topic}[/bold].")
    imposter_won = not Confirm.ask("Did the crew catch the imposter?", default=True)
    engine.tally(imposter_won)


def run_celebration(engine: GameEngine) -> bool:
    """Show winners and the next-step menu. Returns False when the user quits."""
    winners = ", ".join(p.name for p in engine.state.recent_winners)
    if engine.state.imposter_won:
        console.print(Panel(f"[bold red]THE IMPOSTER WINS![/bold red]\n{winners}", border_style="red"))
    else:
        console.print(Panel(f"[bold green]THE CREW WINS![/bold green]\n{winners}", border_style="green"))
    display_standings(engine.standings())

    console.print("[cyan]p[/cyan]lay again, [cyan]e[/cyan]dit players, reset [cyan]w[/cyan]ins, "
                  "reset [cyan]n[/cyan]ames, [cyan]q[/cyan]uit")
    choice = Prompt.ask("Choose", choices=["p", "e", "w", "n", "q"], default="p", show_choices=False)

    if choice == "q":
        return False
    if choice == "e":
        engine.reset_to_setup()
    elif choice == "w":
        engine.reset_wins()
        display_standings(engine.standings())
    elif choice == "n":
        engine.reset_names()
        display_standings(engine.standings())
    else:
        engine.prepare_next_round()
    return True


async def run_session(engine: GameEngine, config: AppConfig, store: YamlStore):
    """Drive the engine until the user quits."""
    while True:
        mode = engine.mode

        if mode == GameMode.SETUP:
            if not run_setup(engine, config, store):
                break
        elif mode == GameMode.NAME_ENTRY:
            run_name_entry(engine)
        elif mode == GameMode.DISTRIBUTION:
            await run_distribution(engine, config)
        elif mode == GameMode.DISCUSSION:
            await run_discussion(engine)
        elif mode == GameMode.CELEBRATION:
            if not run_celebration(engine):
                break


async def main():
    """Main entry point."""
    display_welcome()

    # Load configuration
    config_path = sys.argv[1] if len(sys.argv) > 1 else "config/game.yaml"
    console.print(f"[dim]Loading config from: {config_path}[/dim]")
    try:
        config = load_config(config_path)
    except ValidationError as e:
        console.print(f"[red]Invalid config file {config_path}:[/red]\n{e}")
        sys.exit(1)

    store = YamlStore(config.storage.path)
    if config.topics.file:
        catalog = load_catalog(config.topics.file)
    else:
        catalog = TopicCatalog.default()
    logger = MarkdownLogger(base_dir=config.logging.dir) if config.logging.enabled else None

    engine = GameEngine(store, store, catalog, logger=logger)

    try:
        await run_session(engine, config, store)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Game interrupted by user.[/yellow]")
        sys.exit(0)

    if logger and logger.session_dir:
        console.print(f"[dim]Session log saved to: {logger.session_dir}[/dim]")


def run():
    """Entry point for the CLI."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
