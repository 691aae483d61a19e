from dataclasses import dataclass
from typing import Dict, List, Optional, TYPE_CHECKING

from .game import FeedbackRow, LetterClassification

# Use a forward reference for the type hints to avoid circular imports
if TYPE_CHECKING:
    from .game import SessionController
    from .stats import StatsAggregator

RESET = "\033[0m"
BOLD = "\033[1m"
DIM = "\033[2m"


def colored(st, color: Optional[str], background=False): return f"\u001b[{10*background+60*(color.upper() == color)+30+['black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white'].index(color.lower())}m{st}\u001b[0m" if color is not None else st


# --- Themes ---
@dataclass(frozen=True)
class Theme:
    name: str
    tiles: Dict[LetterClassification, str]
    success: str
    error: str
    warn: str
    info: str

    def tile(self, classification: LetterClassification) -> str:
        return self.tiles[classification]


THEMES: Dict[str, Theme] = {
    "classic": Theme(
        name="classic",
        tiles={
            LetterClassification.CORRECT: "\033[30;102m",  # green background
            LetterClassification.PRESENT: "\033[30;103m",  # yellow background
            LetterClassification.ABSENT: "\033[30;107m",   # gray background
        },
        success="\033[0;32m", error="\033[0;31m", warn="\033[1;33m", info="\033[0;34m",
    ),
    "high-contrast": Theme(
        name="high-contrast",
        tiles={
            LetterClassification.CORRECT: "\033[37;42m",
            LetterClassification.PRESENT: "\033[30;43m",
            LetterClassification.ABSENT: "\033[37;40m",
        },
        success="\033[1;32m", error="\033[1;31m", warn="\033[1;33m", info="\033[1;34m",
    ),
    "colorblind": Theme(
        name="colorblind",
        tiles={
            LetterClassification.CORRECT: "\033[37;44m",  # white on blue
            LetterClassification.PRESENT: "\033[30;46m",  # black on cyan
            LetterClassification.ABSENT: "\033[37;40m",
        },
        success="\033[1;36m", error="\033[1;35m", warn="\033[1;33m", info="\033[1;34m",
    ),
}
DEFAULT_THEME = "classic"


def get_theme(name: Optional[str]) -> Theme:
    # unknown themes fall back to classic
    return THEMES.get(name or DEFAULT_THEME, THEMES[DEFAULT_THEME])


def hint_counts(feedback: FeedbackRow) -> Dict[LetterClassification, int]:
    return {c: sum(1 for f in feedback if f is c) for c in LetterClassification}


def format_duration(seconds: float) -> str:
    if seconds < 60:
        return f"{seconds:.3f}s"
    return f"{seconds / 60:.1f}m"


# --- Text-based UI Class ---
class TextUI:
    def __init__(self, theme: Optional[Theme] = None, color: bool = True):
        self.theme = theme or get_theme(DEFAULT_THEME)
        self.color = color
        self.feedback_char_map = {
            LetterClassification.CORRECT: "G",
            LetterClassification.PRESENT: "Y",
            LetterClassification.ABSENT: "X",
        }

    def _style(self, text: str, style: str) -> str:
        return f"{style}{text}{RESET}" if self.color else text

    def welcome(self, word_length: int, max_guesses: int, practice: bool = False) -> str:
        c = self.feedback_char_map
        lines = [
            self._style("Wordle!", BOLD),
            self._style(f"Guess the {word_length}-letter word in {max_guesses} tries!", DIM),
            f"Feedback: [{c[LetterClassification.CORRECT]}] Correct, "
            f"[{c[LetterClassification.PRESENT]}] Present, [{c[LetterClassification.ABSENT]}] Absent.",
        ]
        if practice:
            lines.append(self._style("Practice mode: Hints available", self.theme.info))
        lines.append("-" * 50)
        return "\n".join(lines)

    def prompt(self, session: 'SessionController') -> str:
        attempt_num = session.guesses_used + 1
        return f"Attempt #{attempt_num} ({session.remaining_guesses} left). Enter your guess: "

    def format_feedback(self, guess: str, feedback: FeedbackRow) -> str:
        if not self.color:
            return f"{guess}  {''.join(self.feedback_char_map[f] for f in feedback)}"
        return "".join(f"{self.theme.tile(f)} {letter} {RESET}" for letter, f in zip(guess, feedback))

    def get_text_observation(self, session: 'SessionController', status: Optional[str] = None) -> str:
        board_str = self._get_board_string(session)
        letters_str = self._get_letters_string(session)

        status_message = ""
        if status:
            clean_status = status.replace("'", "")
            status_message = f"Invalid Guess: {clean_status}\n\n"

        return f"{status_message}{board_str}\n{letters_str}"

    def game_over(self, session: 'SessionController', player: str = "You") -> str:
        if session.won:
            return self._style(
                f"{player} guessed the word '{session.target_word}' in {session.guesses_used} tries!",
                self.theme.success,
            )
        return self._style(f"Game over! The secret word was: {session.target_word}", self.theme.error)

    def hint(self, feedback: FeedbackRow) -> str:
        counts = hint_counts(feedback)
        correct = counts[LetterClassification.CORRECT]
        present = counts[LetterClassification.PRESENT]
        if correct == 0 and present == 0:
            return "Hint: None of these letters are in the target word"
        msg = f"Hint: You have {correct} letters in correct positions"
        if present:
            msg += f" and {present} letters in wrong positions"
        return msg

    def stats(self, stats: 'StatsAggregator') -> str:
        if stats.games_played == 0:
            return "No games played yet."
        win_rate = stats.win_rate() * 100
        average = stats.average_winning_guesses()
        lines = [
            self._style("Game Statistics", BOLD),
            self._style("=" * 18, DIM),
            f"Games Played: {stats.games_played}",
            f"Games Won: {stats.games_won}",
            f"Win Rate: {win_rate:.1f}%",
            f"Average Guesses (wins): {'N/A' if average is None else f'{average:.1f}'}",
        ]
        return "\n".join(lines)

    def _get_board_string(self, session: 'SessionController') -> str:
        width = session.config.word_length
        rows = min(session.config.max_guesses, max(session.guesses_used + 1, 6))
        border = "=" * (width + 2)
        lines = [border]
        for i in range(rows):
            if i < session.guesses_used:
                feedback_chars = "".join(self.feedback_char_map[f] for f in session.feedbacks[i])
                lines.append(f"|{session.guesses[i]}|")
                lines.append(f"|{feedback_chars}|")
            else:
                lines.append(f"|{' ' * width}|")
                lines.append(f"|{' ' * width}|")

            if i < rows - 1:
                lines.append("-" * (width + 2))
        lines.append(border)
        return "\n".join(lines)

    def _get_letters_string(self, session: 'SessionController') -> str:
        letter_states = session.letter_states()

        def letters(state: str) -> List[str]:
            return sorted(k for k, v in letter_states.items() if v == state)

        lines = ["\nLetters:"]
        lines.append(f"  Correct: {' '.join(letters('correct'))}")
        lines.append(f"  Present: {' '.join(letters('present'))}")
        lines.append(f"  Absent:  {' '.join(letters('absent'))}")
        lines.append(f"  Unused:  {' '.join(letters('unused'))}")
        return "\n".join(lines)
