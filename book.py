from __future__ import annotations


class Book:
    """Represents a single book row."""

    def __init__(self, name: str, author: str, id: int | None = None) -> None:
        self.id = id
        self.name = name.strip()
        self.author = author.strip()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Book):
            return NotImplemented
        return (self.id, self.name, self.author) == (other.id, other.name, other.author)

    def to_dict(self) -> dict:
        # ids are strings on the wire, integers in storage
        return {
            "id": "" if self.id is None else str(self.id),
            "name": self.name,
            "author": self.author,
        }

    @staticmethod
    def from_row(row) -> "Book":
        return Book(id=int(row["id"]), name=row["name"], author=row["author"])
