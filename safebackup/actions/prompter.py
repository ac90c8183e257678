"""User interaction for the actions.

The dispatcher never touches the terminal directly. It asks questions
and reports progress through a prompter, so tests can feed canned
answers through ``ScriptedPrompter``.
"""

import sys
from collections import deque


class Prompter:
    """Line-oriented console I/O.

    ``ask`` prints a prompt and blocks for exactly one line. End of input
    reads as an empty answer.
    """

    def __init__(self, stdin=None, stdout=None, stderr=None):
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stderr = stderr if stderr is not None else sys.stderr

    def ask(self, prompt: str) -> str:
        print(prompt, file=self.stdout, flush=True)
        line = self.stdin.readline()
        return line.strip()

    def tell(self, message: str):
        print(message, file=self.stdout)

    def warn(self, message: str):
        print(message, file=self.stderr)


class ScriptedPrompter(Prompter):
    """Prompter that answers from a fixed list and records the transcript."""

    def __init__(self, answers=()):
        self.answers = deque(answers)
        self.prompts: list[str] = []
        self.told: list[str] = []
        self.warnings: list[str] = []

    def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            return ""
        return self.answers.popleft().strip()

    def tell(self, message: str):
        self.told.append(message)

    def warn(self, message: str):
        self.warnings.append(message)
