from wordlecli.agent import ReasoningEffort, play_wordle
from wordlecli.config import load_settings
from wordlecli.logs import setup_logging


if __name__ == "__main__":
    setup_logging()
    params = {
        "model": "gemini/gemini-2.5-flash-lite",
        # "model": "gemini/gemini-2.5-flash",
        # "model": "groq/openai/gpt-oss-120b",
        "reasoning_effort": ReasoningEffort.LOW,
        "target_word": "GOODY",
        "settings": load_settings(),
        "logging_enabled": True
    }
    play_wordle(**params)
