"""Enums for the application"""

from enum import Enum


class FieldKind(str, Enum):
    """Input widget kinds used when rendering a registration field"""

    ID = "id"
    TEXT = "text"
    EMAIL = "email"
    PHONE = "phone"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    SELECT = "select"
    MULTISELECT = "multiselect"
    BOOLEAN = "boolean"
    FILE = "file"


class SortType(str, Enum):
    """How values of a field are ordered when sorting"""

    STRING = "string"
    NUMERIC = "numeric"
    CHRONOLOGICAL = "chronological"
    LIST = "list"


SORT_TYPE_BY_KIND = {
    FieldKind.ID: SortType.STRING,
    FieldKind.TEXT: SortType.STRING,
    FieldKind.EMAIL: SortType.STRING,
    FieldKind.PHONE: SortType.STRING,
    FieldKind.TEXTAREA: SortType.STRING,
    FieldKind.SELECT: SortType.STRING,
    FieldKind.FILE: SortType.STRING,
    FieldKind.NUMBER: SortType.NUMERIC,
    FieldKind.BOOLEAN: SortType.NUMERIC,
    FieldKind.DATE: SortType.CHRONOLOGICAL,
    FieldKind.DATETIME: SortType.CHRONOLOGICAL,
    FieldKind.MULTISELECT: SortType.LIST,
}
