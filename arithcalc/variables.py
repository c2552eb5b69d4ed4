import string

LETTERS = string.ascii_uppercase


def _slot(letter: str) -> int:
    if len(letter) != 1 or letter.upper() not in LETTERS:
        raise ValueError(f"Variable name must be a single letter A-Z, got {letter!r}")
    return LETTERS.index(letter.upper())


class VariableStore:
    """Values of the single-letter variables A-Z, all starting at 0.0."""

    def __init__(self) -> None:
        self._values = [0.0] * len(LETTERS)

    def get(self, letter: str) -> float:
        return self._values[_slot(letter)]

    def set(self, letter: str, value: float) -> None:
        self._values[_slot(letter)] = value

    def reset(self) -> None:
        self._values = [0.0] * len(LETTERS)

    def as_dict(self) -> dict[str, float]:
        return dict(zip(LETTERS, self._values))

    def assigned(self) -> dict[str, float]:
        return {letter: value for letter, value in self.as_dict().items() if value != 0.0}
