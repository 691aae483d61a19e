import json
import logging
import os
import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from dotenv import load_dotenv
from litellm import completion, get_supported_openai_params

from .config import Settings
from .env import WordleEnv
from .render import colored
from .stats import StatsAggregator
from .words import WordList

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_GUESS = "RAISE"
# attempts across the whole game, invalid words included
MAX_ATTEMPTS_FACTOR = 3


class ReasoningEffort(Enum):
    DISABLE = "disable"
    LOW     = "low"
    MEDIUM  = "medium"
    HIGH    = "high"


def query(
    model: str,
    reasoning_effort: Optional[ReasoningEffort],
    messages: List[Dict[str, Any]],
) -> Tuple[str, Optional[str], Any]:
    if reasoning_effort is not None:
        response = completion(model=model, messages=messages, reasoning_effort=reasoning_effort.value)
    else:
        response = completion(model=model, messages=messages)
    answer = response.choices[0].message.content
    cot = getattr(response.choices[0].message, "reasoning_content", None)
    token_usage = response.usage
    return answer, cot, token_usage


def parse_guess(answer: Optional[str], word_length: int) -> Optional[str]:
    """Pulls the bracketed word, e.g. [CRANE], out of a model answer."""
    match = re.search(r'\[([A-Z]{%d})\]' % word_length, (answer or "").upper())
    return match.group(1) if match else None


def system_prompt(word_length: int, max_guesses: int) -> str:
    return (
        f"You are an expert Wordle player. Your objective is to guess a {word_length}-letter secret word "
        f"in {max_guesses} tries. I will provide the current game state after each of your guesses. "
        "In the board, G marks a correct letter, Y a letter in the wrong position and X an absent letter. "
        f"Your response MUST be a single, valid {word_length}-letter English word enclosed in square brackets, like [WORD]."
    )


def play_wordle(
    model: str,
    reasoning_effort: ReasoningEffort,
    target_word: Optional[str] = None,
    settings: Optional[Settings] = None,
    word_list: Optional[WordList] = None,
    stats: Optional[StatsAggregator] = None,
    logging_enabled: bool = True,
    log_root: Path = Path("logs"),
) -> WordleEnv:
    """
    Plays a game of Wordle using an LLM agent.

    Args:
        model (str): The identifier of the model to use.
        reasoning_effort (ReasoningEffort): The reasoning effort setting for the model.
        target_word (str): The secret word for the game. Random when omitted.
        settings (Settings): Game settings (word length, guesses, dictionary).
        word_list (WordList): Guessable words, loaded from settings when omitted.
        stats (StatsAggregator): Shared statistics across several games.
        logging_enabled (bool): If True, saves the game state and conversation to disk.
        log_root (Path): Directory the per-game logs are written under.

    Returns:
        WordleEnv: The finished environment, with its session and game log.
    """
    env = WordleEnv(settings=settings, word_list=word_list, target_word=target_word, model_name=model, stats=stats)
    obs = env.reset()
    session = env.session
    word_length = env.config.word_length

    print(colored("=" * 30, "blue"))
    print(colored("Let's Play Wordle with an LLM!", "cyan"))
    print(f"{colored('Model:', 'magenta')} {colored(model, 'yellow')}")
    print(f"{colored('Target Word:', 'magenta')} {colored(session.target_word, 'yellow')}")
    print(f"{colored('Logging:', 'magenta')} {colored('Enabled' if logging_enabled else 'Disabled', 'yellow')}")
    print(colored("=" * 30, "blue"))

    game_log_dir: Optional[Path] = None
    if logging_enabled:
        model_dir_name = model.replace('/', '_')  # Sanitize model name
        game_log_dir = Path(log_root) / model_dir_name / env.game_id
        os.makedirs(game_log_dir, exist_ok=True)
        print(colored(f"Logs for this game will be saved to: {game_log_dir}", "blue"))

    messages: List[Dict[str, Any]] = [
        {"role": "system", "content": system_prompt(word_length, env.config.max_guesses)},
        {"role": "user", "content": f"Here is the initial state:\n{obs['text']}\n\nWhat is your first guess?"},
    ]
    print(obs['text'])

    supported_params = get_supported_openai_params(model=model) or []
    current_reasoning_effort = reasoning_effort if "reasoning_effort" in supported_params else None

    attempts = 0
    max_attempts = env.config.max_guesses * MAX_ATTEMPTS_FACTOR
    while not session.is_over and attempts < max_attempts:
        attempts += 1
        answer, thoughts, _ = query(model, current_reasoning_effort, messages)

        guess = parse_guess(answer, word_length)
        if guess is None:
            guess = DEFAULT_GUESS if len(DEFAULT_GUESS) == word_length else next(iter(env.word_list))
            print(colored(f"LLM returned an invalid response: '{answer}'. Defaulting to '{guess}'.", "red"))

        if thoughts:
            print(colored("\n[chain-of-thought]", "yellow"), f"\n{thoughts}")

        print(f"\n{colored(f'LLM Guess ({session.guesses_used + 1}/{env.config.max_guesses}):', 'cyan')} {colored(guess, 'yellow')}")
        print(30 * "-", "\n")

        messages.append({"role": "assistant", "content": f"[{guess}]"})

        turn_str = str(session.guesses_used + 1)
        obs, done = env.step(guess)
        env.game_state['rollout'][turn_str]['steps'][-1]['output'] = answer

        print(obs['text'])
        if done:
            break

        messages.append({"role": "user", "content": f"Here is the current state:\n{obs['text']}\n\nWhat is your next guess?"})

    if not session.is_over:
        logger.warning("Stopped after %d attempts without finishing the game.", attempts)

    print(colored("=" * 30, "blue"))
    agent_name = f"{model} with {reasoning_effort.value} reasoning"
    if session.won:
        print(colored(f"{agent_name} won! Guessed '{session.target_word}' in {session.guesses_used} tries.", "green"))
    else:
        print(colored(f"{agent_name} lost. The word was '{session.target_word}'.", "red"))

    if logging_enabled and game_log_dir:
        print(colored("-" * 30, "blue"))
        save_json(game_log_dir / "game_state.json", env.game_state, "Game state log")
        save_json(game_log_dir / "conversation.json", messages, "Conversation log")

    print(colored("=" * 30, "blue"))
    return env


def save_json(path: Path, payload: Any, label: str) -> bool:
    try:
        with open(path, 'w') as f:
            json.dump(payload, f, indent=4)
    except OSError as e:
        print(colored(f"Error saving {label.lower()}: {e}", "red"))
        return False
    print(colored(f"{label} saved to: {path}", "green"))
    return True
