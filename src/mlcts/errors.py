"""Errors raised by the MLCTS pipeline, one class per failure mode."""

from __future__ import annotations


class MlctsError(Exception):
    """Base class. `stage` names the pipeline step that failed."""

    stage = "pipeline"

    def to_dict(self) -> dict:
        return {"error": type(self).__name__, "stage": self.stage, "message": str(self)}


class LexError(MlctsError):
    """A character outside the MLCTS catalog, or a word that cannot be segmented."""

    stage = "tokenizer"

    def __init__(self, offset: int, char: str = "", text: str = "",
                 reason: str = "unrecognised character"):
        self.offset = offset
        self.char = char
        self.text = text
        self.reason = reason
        if char:
            msg = f"{reason} {char!r} at offset {offset}"
        else:
            msg = f"unexpected end of input at offset {offset}"
        super().__init__(msg)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(offset=self.offset, char=self.char)
        return d


class AmbiguityOverflow(MlctsError):
    """More candidate parses than the configured bound."""

    stage = "tokenizer"

    def __init__(self, limit: int, text: str = ""):
        self.limit = limit
        self.text = text
        super().__init__(f"{text!r} has more than {limit} candidate parses")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["limit"] = self.limit
        return d


class InvalidStructure(MlctsError):
    """A syllable whose tokens break Burmese syllable structure."""

    stage = "generator"

    def __init__(self, syllable_index: int, reason: str):
        self.syllable_index = syllable_index
        self.reason = reason
        super().__init__(f"syllable {syllable_index}: {reason}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update(syllable_index=self.syllable_index, reason=self.reason)
        return d


class NoValidParse(MlctsError):
    """No candidate parse survived structural validation."""

    stage = "resolver"

    def __init__(self, text: str, errors: list[InvalidStructure] | None = None):
        self.text = text
        self.errors = list(errors or [])
        if self.errors:
            detail = "; ".join(e.reason for e in self.errors[:3])
            msg = f"no valid parse for {text!r} ({detail})"
        else:
            msg = f"no valid parse for {text!r}"
        super().__init__(msg)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["errors"] = [e.to_dict() for e in self.errors]
        return d
