from pydantic import BaseModel, ConfigDict, Field, computed_field


class Tip(BaseModel):
    """One advisory line: a leading glyph and the message shown next to it."""

    model_config = ConfigDict(frozen=True)

    icon: str = Field(description="Single glyph token, never contains a space.")
    text: str = Field(description="Advisory message shown after the glyph.")

    @computed_field
    @property
    def line(self) -> str:
        """Rendered as '<icon> <text>' for displays that split on the first space."""
        return f"{self.icon} {self.text}"

    def __str__(self) -> str:
        return self.line

    @classmethod
    def parse(cls, line: str) -> "Tip":
        """Split a rendered tip on its first space."""
        icon, _, text = line.partition(" ")
        return cls(icon=icon, text=text)
