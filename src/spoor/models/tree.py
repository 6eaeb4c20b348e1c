"""Generic parse tree produced from the XML description file."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Text(BaseModel):
    """Character data between elements."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    content: str


class Element(BaseModel):
    """An element with its attributes and ordered children."""

    model_config = ConfigDict(frozen=True)

    type: Literal["element"] = "element"
    name: str = Field(min_length=1)
    attributes: dict[str, str] = Field(default_factory=dict)
    children: list["ParsedNode"] = Field(default_factory=list)

    def elements(self, name: str | None = None) -> list["Element"]:
        """Child elements, optionally only those with the given name."""
        return [
            child
            for child in self.children
            if isinstance(child, Element) and (name is None or child.name == name)
        ]

    def text(self) -> str:
        """Concatenated text of the direct ``Text`` children."""
        return "".join(
            child.content for child in self.children if isinstance(child, Text)
        )


ParsedNode = Annotated[Union[Element, Text], Field(discriminator="type")]

Element.model_rebuild()
