import argparse
import logging
import random
import sys
import time
import uuid
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from . import __version__
from .config import MAX_WORD_LENGTH, MIN_WORD_LENGTH, Settings, load_settings
from .errors import EmptyWordList, InvalidGuess, SessionTerminated
from .game import UNLIMITED_GUESSES, LetterClassification, SessionController
from .logs import setup_logging
from .render import THEMES, TextUI, format_duration, get_theme
from .stats import StatsAggregator
from .words import WordList, select_target

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_DICT_ERROR = 3
EXIT_INPUT_ERROR = 4
EXIT_CONFIG_ERROR = 5


class WordleEnv:
    """A Wordle game environment."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        word_list: Optional[WordList] = None,
        target_word: Optional[str] = None,
        rng: Optional[random.Random] = None,
        model_name: str = "human",
        stats: Optional[StatsAggregator] = None,
    ):
        """
        Initializes the Wordle environment.

        Args:
            settings (Settings): Word length, guess limit, dictionary and theme.
            word_list (WordList): Guessable words. Loaded from settings when omitted.
            target_word (str): A specific word to use for every game.
            rng (random.Random): Source of randomness for target selection.
            model_name (str): The name of whoever is playing, kept in the game log.
            stats (StatsAggregator): Shared statistics; a private one is created when omitted.

        Raises:
            FileNotFoundError: If the dictionary file does not exist.
            EmptyWordList: If there is no word to pick a target from.
        """
        self.settings = settings or Settings()
        self.config = self.settings.game_config()

        if word_list is None:
            word_list = WordList.from_file(self.settings.words_path, self.config.word_length)
        self.word_list = word_list
        self.target_word_arg = target_word.upper() if target_word else None
        if self.target_word_arg:
            self.word_list.add(self.target_word_arg)
        if not len(self.word_list):
            raise EmptyWordList(
                f"No {self.config.word_length}-letter words found in dictionary: {self.settings.words_path}"
            )

        self.rng = rng or random.Random()
        self.model_name = model_name
        self.stats = stats or StatsAggregator()
        self.ui = TextUI(get_theme(self.settings.theme))

        self.session: Optional[SessionController] = None
        self.game_id: Optional[str] = None

        # every input, accepted or not, is tracked here and not in the session
        self.game_state: Dict[str, Any] = {}
        self.last_status: Optional[str] = None

    def reset(self) -> Dict[str, Any]:
        """
        Starts a new game and returns the initial observation.
        """
        target = self.target_word_arg or select_target(self.word_list, self.rng)
        self.session = SessionController(self.config, target)
        self.game_id = str(uuid.uuid4())
        self.last_status = None

        self.game_state = {
            "model": self.model_name,
            "game_id": self.game_id,
            "target_word": self.session.target_word,
            "won": False,
            "num_turns": 0,
            "rollout": {}
        }
        logger.debug(
            "Starting game with %d-letter word, max %d guesses",
            self.config.word_length, self.config.max_guesses,
        )
        return self._get_observation()

    def step(self, guess: str) -> Tuple[Dict[str, Any], bool]:
        """
        Takes a raw guess, updates the game, and returns the new observation and done flag.

        A guess that is not a valid word is recorded in the rollout and reported
        in the observation's status, but does not use up a turn.
        """
        if not self.session:
            raise RuntimeError("You must call reset() before calling step().")
        if self.session.is_over:
            raise SessionTerminated("Game is over. Call reset() to play again.")

        # create new turn entry in rollout
        turn_str = str(self.session.guesses_used + 1)
        if turn_str not in self.game_state['rollout']:
            self.game_state['rollout'][turn_str] = {"steps": []}

        # the state of the game before applying the guess
        previous_obs = self.ui.get_text_observation(self.session, status=self.last_status)
        self.last_status = None

        feedback: Optional[List[LetterClassification]] = None
        try:
            word = self.word_list.validate_guess(guess)
        except InvalidGuess as e:
            self.last_status = str(e)
            logger.debug("Rejected guess %r: %s", guess, e)
        else:
            feedback, state = self.session.submit_guess(word)
            logger.debug("Processed guess %d: %s (%s)", self.session.guesses_used, word, state.value)

        self.game_state['rollout'][turn_str]["steps"].append({
            "input": previous_obs,
            "output": None,
            "guess": guess.strip().upper(),
            "feedback": self.last_status if feedback is None else [f.value for f in feedback],
        })

        if self.session.is_over:
            self.game_state['won'] = self.session.won
            self.game_state['num_turns'] = self.session.guesses_used
            self.stats.record(self.session.record)
            logger.debug(
                "Game completed. Total games: %d, Won: %d",
                self.stats.games_played, self.stats.games_won,
            )

        return self._get_observation(feedback), self.session.is_over

    def _get_observation(self, feedback: Optional[List[LetterClassification]] = None) -> Dict[str, Any]:
        if not self.session:
            return {}
        return {
            'text': self.ui.get_text_observation(self.session, status=self.last_status),
            'feedback': feedback,
            'status': self.last_status,
        }


def play_interactive(env: WordleEnv, input_fn: Optional[Callable[[str], str]] = None) -> int:
    """Plays one game against a human on the terminal. Returns an exit code."""
    input_fn = input_fn or input
    settings = env.settings
    ui = env.ui
    env.reset()
    session = env.session

    if not settings.quiet:
        print()
        print(ui.welcome(env.config.word_length, env.config.max_guesses, practice=settings.practice))
        print()

    while not session.is_over:
        try:
            raw = input_fn(ui.prompt(session))
        except (KeyboardInterrupt, EOFError):
            print("\n\nExiting game.")
            logger.error("Failed to read input")
            return EXIT_INPUT_ERROR

        if not raw.strip():
            print("Please enter a word.")
            continue

        obs, _ = env.step(raw)
        if obs['status']:
            logger.error(obs['status'])
            if settings.practice:
                logger.info("Hint: Try common English words with %d letters", env.config.word_length)
            continue

        print(ui.format_feedback(session.guesses[-1], obs['feedback']))
        if settings.practice and not session.won and session.guesses_used >= env.config.max_guesses // 2:
            logger.info(ui.hint(obs['feedback']))

    print(ui.game_over(session))
    return EXIT_SUCCESS


def _word_length(value: str) -> int:
    if not value.isdigit() or not MIN_WORD_LENGTH <= int(value) <= MAX_WORD_LENGTH:
        raise argparse.ArgumentTypeError(
            f"--length requires a number between {MIN_WORD_LENGTH} and {MAX_WORD_LENGTH}"
        )
    return int(value)


def _max_guesses(value: str) -> int:
    if not value.isdigit() or int(value) < 1:
        raise argparse.ArgumentTypeError("--guesses requires a positive number")
    return int(value)


def _existing_file(value: str) -> Path:
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError("--word-list requires a valid file path")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle",
        description="A command-line implementation of the Wordle word guessing game.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        epilog="Command line options override configuration file settings.",
    )
    parser.add_argument('-v', '--version', action='version', version=f"%(prog)s {__version__}")
    parser.add_argument('-c', '--config', type=Path, default=None, help="Use custom configuration file (default: ./.wordle.conf)")
    parser.add_argument('-d', '--debug', action='store_true', help="Enable debug mode with detailed logging")
    parser.add_argument('-V', '--verbose', action='store_true', help="Enable verbose output")
    parser.add_argument('-q', '--quiet', action='store_true', help="Suppress non-essential output")
    parser.add_argument('-s', '--stats', action='store_true', help="Show game statistics")
    parser.add_argument('-t', '--timing', action='store_true', help="Show timing information")
    parser.add_argument('-p', '--practice', action='store_true', help="Enable practice mode (hints available)")
    parser.add_argument('-w', '--word-list', type=_existing_file, default=None, help="Use custom word list file")
    parser.add_argument('-l', '--length', type=_word_length, default=None, help="Set word length")
    parser.add_argument('-g', '--guesses', type=_max_guesses, default=None, help="Set maximum guesses")
    parser.add_argument('-T', '--theme', choices=sorted(THEMES), default=None, help="Set color theme")
    parser.add_argument('--unlimit', action='store_true', help="Allow unlimited guesses")
    parser.add_argument('--play-again', action='store_true', help="Offer another game after each one")
    return parser


def apply_arguments(settings: Settings, args: argparse.Namespace) -> Settings:
    """Overrides config file settings with whatever was given on the command line."""
    if args.debug:
        settings.debug = settings.verbose = True
        settings.log_level = "DEBUG"
    if args.verbose:
        settings.verbose = True
    if args.quiet:
        settings.quiet = True
        settings.log_level = "ERROR"
    settings.show_stats = settings.show_stats or args.stats
    settings.show_timing = settings.show_timing or args.timing
    settings.practice = settings.practice or args.practice
    if args.word_list:
        settings.word_list = args.word_list
    if args.length:
        settings.word_length = args.length
    if args.guesses:
        settings.max_guesses = args.guesses
    if args.theme:
        settings.theme = args.theme
    if args.unlimit:
        settings.max_guesses = UNLIMITED_GUESSES
        logger.debug("Unlimited guesses mode enabled")
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main function to run an interactive Wordle game from the command line."""
    args = build_parser().parse_args(argv)

    # early logging so that config file warnings are visible
    setup_logging("DEBUG" if args.debug else "INFO", verbose=args.verbose, debug=args.debug)

    if args.config and not args.config.is_file():
        logger.error("Configuration file not found: %s", args.config)
        return EXIT_CONFIG_ERROR
    settings = apply_arguments(load_settings(args.config), args)
    setup_logging(settings.log_level, verbose=settings.verbose, debug=settings.debug,
                  theme=get_theme(settings.theme))
    logger.debug(
        "Configuration: length=%d, guesses=%d, theme=%s",
        settings.word_length, settings.max_guesses, settings.theme,
    )
    if settings.practice:
        logger.info("Practice mode enabled (hints available)")

    start_time = time.perf_counter()
    if settings.show_timing:
        logger.info("Starting Wordle game...")

    try:
        env = WordleEnv(settings)
    except (FileNotFoundError, EmptyWordList) as e:
        logger.error(e)
        logger.error("Please check your dictionary file or use --word-list option")
        return EXIT_DICT_ERROR

    while True:
        code = play_interactive(env)
        if code != EXIT_SUCCESS:
            return code
        if not args.play_again:
            break
        try:
            again = input("Play again? [y/N] ").strip().lower()
        except (KeyboardInterrupt, EOFError):
            break
        if again not in ("y", "yes"):
            break

    if settings.show_stats:
        print()
        print(env.ui.stats(env.stats))

    if settings.show_timing:
        logger.info("Game completed in %s", format_duration(time.perf_counter() - start_time))

    return EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
