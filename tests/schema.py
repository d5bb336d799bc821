from typing import List, Optional
from enum import Enum
from pydantic import BaseModel, Field

class Genre(str, Enum):
    FICTION = "fiction"
    SCIENCE = "science"

class Author(BaseModel):
    name: str
    born: Optional[int] = None

class Book(BaseModel):
    id: int
    title: str
    genre: Genre = Genre.FICTION
    authors: List[Author] = []
    isbn_code: Optional[str] = Field(None, alias="isbn")

class Category(BaseModel):
    name: str
    subcategories: List["Category"] = []

class Shelf(BaseModel):
    type: str
    books: List[Book] = []
