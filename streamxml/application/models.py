from dataclasses import dataclass


@dataclass(slots=True)
class WriterStats:
    elements: int = 0
    attributes: int = 0
    text_nodes: int = 0
    declarations: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "elements": self.elements,
            "attributes": self.attributes,
            "text_nodes": self.text_nodes,
            "declarations": self.declarations,
        }
