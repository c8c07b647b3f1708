"""Flattened report schemas."""

from pydantic import BaseModel


class LabelValueEntry(BaseModel):
    """A single display row produced by the report extractors."""

    label: str
    value: str | int


class FlattenedReport(BaseModel):
    """Display-friendly summary of a PageSpeed Insights report."""

    overview: dict[str, str | int]
    statistics: dict[str, str | int]
    ruleResults: dict[str, str | int]
    opportunities: dict[str, str | int]
