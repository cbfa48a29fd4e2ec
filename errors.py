class TaggerError(Exception):
    """Base class for every error raised by the tagger."""


class CorpusReadError(TaggerError):
    def __init__(self, path, status, reason):
        super().__init__(f"{path}: {status.value} ({reason})")
        self.path = path
        self.status = status
        self.reason = reason


class AlignmentError(TaggerError, ValueError):
    """Words and tags are not positionally aligned."""


class DeadEndError(TaggerError):
    """No tag is reachable at some position of the sentence."""

    def __init__(self, position, word):
        super().__init__(f"no reachable tag at position {position} (word {word!r})")
        self.position = position
        self.word = word


class LengthMismatchError(TaggerError, ValueError):
    def __init__(self, predicted_len, gold_len):
        super().__init__(f"predicted {predicted_len} tags but gold has {gold_len}")
        self.predicted_len = predicted_len
        self.gold_len = gold_len
