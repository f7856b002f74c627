"""Relief resource request model."""

from __future__ import annotations

from typing import Any, NamedTuple

from pydantic import AliasChoices, Field, field_validator, model_validator

from reliefmap.models._base import ReliefBaseModel
from reliefmap.models.geo import Coordinate

# Boolean "needX" flags in the public listing, mapped to a readable label.
_NEED_FLAGS: dict[str, str] = {
    "needwater": "water",
    "needfood": "food",
    "needcloth": "clothing",
    "needmed": "medicine",
    "needtoilet": "toiletries",
    "needkit_util": "kitchen utensils",
    "needrescue": "rescue",
}

_TRUTHY = frozenset({"1", "true", "yes", "y", "on", "t"})


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def _split_latlng(value: Any) -> tuple[float, float] | None:
    """Parse ``"10.52,76.21"`` style strings."""
    if not isinstance(value, str) or "," not in value:
        return None
    lat_text, _, lon_text = value.partition(",")
    try:
        return float(lat_text), float(lon_text)
    except ValueError:
        return None


class AnnotationKey(NamedTuple):
    """Value identity of a request on the map: coordinate plus display text."""

    latitude: float
    longitude: float
    title: str | None
    subtitle: str | None


class RequestRecord(ReliefBaseModel):
    """A single relief resource request.

    Records are created on every refresh and replaced wholesale; there is
    no stable identifier, so map identity is :attr:`annotation_key`.

    Parameters
    ----------
    latitude, longitude : float
        Location of the people in need.
    is_request_for_others : bool
        ``True`` when someone filed the request on behalf of others. Such
        requests are not pinned on the map.
    title : str or None
        Callout title (the request's place name).
    subtitle : str or None
        Callout subtitle (district).
    requestee : str or None
        Name of the person who filed the request.
    requestee_phone : str or None
        Contact phone number. Redacted from logs.
    needs : tuple of str
        Human-readable list of needed resources.
    status : str or None
        Processing status reported by the listing.
    """

    latitude: float = Field(..., ge=-90.0, le=90.0, validation_alias=AliasChoices("latitude", "lat"))
    longitude: float = Field(
        ...,
        ge=-180.0,
        le=180.0,
        validation_alias=AliasChoices("longitude", "lng", "lon"),
    )
    is_request_for_others: bool = False
    title: str | None = Field(default=None, validation_alias=AliasChoices("title", "location"))
    subtitle: str | None = Field(default=None, validation_alias=AliasChoices("subtitle", "district"))
    requestee: str | None = None
    requestee_phone: str | None = None
    needs: tuple[str, ...] = ()
    status: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _derive_fields(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        if "latitude" not in merged and "lat" not in merged:
            pair = _split_latlng(merged.get("latlng"))
            if pair is not None:
                merged["latitude"], merged["longitude"] = pair
        if "needs" not in merged:
            flagged = [label for key, label in _NEED_FLAGS.items() if _as_bool(merged.get(key))]
            if flagged:
                merged["needs"] = tuple(flagged)
        return merged

    @field_validator("is_request_for_others", mode="before")
    @classmethod
    def _coerce_bool(cls, value: Any) -> bool:
        return _as_bool(value)

    @field_validator("title", "subtitle", "requestee", "requestee_phone", "status", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        text = str(value).strip()
        return text or None

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(latitude=self.latitude, longitude=self.longitude)

    @property
    def annotation_key(self) -> AnnotationKey:
        return AnnotationKey(self.latitude, self.longitude, self.title, self.subtitle)
