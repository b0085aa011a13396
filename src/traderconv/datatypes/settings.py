# -*- coding: utf-8 -*-
"""Data types of the general settings file: licenses, traders and objects."""

import dataclasses
import enum
from typing import Any

from traderconv import jsonenc

# npcId reserved for the ATM.
ATM_NPC_ID = -2

# Loadout quantity meaning "unlimited".
UNLIMITED_QUANTITY = -1

DEFAULT_COEFFICIENT_WORN = 0.7
DEFAULT_COEFFICIENT_DAMAGED = 0.5
DEFAULT_COEFFICIENT_BADLY_DAMAGED = 0.3

Vector = list[float]


class LoadoutSlot(enum.StrEnum):
    """Inventory slots that a trader loadout item can be placed into."""

    HEAD = "Head"
    SHOULDER = "Shoulder"
    MELEE = "Melee"
    HEADGEAR = "Headgear"
    MASK = "Mask"
    EYEWEAR = "Eyewear"
    HANDS = "Hands"
    LEFT_HAND = "LeftHand"
    GLOVES = "Gloves"
    ARMBAND = "Armband"
    VEST = "Vest"
    BODY = "Body"
    BACK = "Back"
    HIPS = "Hips"
    LEGS = "Legs"
    FEET = "Feet"
    SPLINT_RIGHT = "Splint_Right"


# Slot name of items whose slot has not been assigned yet.
UNASSIGNED_SLOT = ""

_SLOT_NAMES = frozenset(slot.value for slot in LoadoutSlot)


@dataclasses.dataclass
class License:
    """A license that players may need to access categories."""

    license_id: str
    license_name: str
    description: str = ""

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "licenseId": self.license_id,
            "licenseName": self.license_name,
            "description": self.description,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "License":
        """Creates a License from its JSON object."""
        return cls(
            license_id=str(o.get("licenseId") or ""),
            license_name=str(o.get("licenseName") or ""),
            description=str(o.get("description") or ""),
        )


@dataclasses.dataclass
class LoadoutAttachment:
    """Attachment of a loadout item. Attachments do not nest further."""

    class_name: str
    quantity: int = UNLIMITED_QUANTITY

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {"className": self.class_name, "quantity": self.quantity}

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "LoadoutAttachment":
        """Creates a LoadoutAttachment from its JSON object."""
        return cls(
            class_name=str(o.get("className") or ""),
            quantity=int(jsonenc.get_or_default(o, "quantity", UNLIMITED_QUANTITY)),
        )


@dataclasses.dataclass
class LoadoutItem:
    """An item that a trader NPC carries or wears."""

    class_name: str
    quantity: int = UNLIMITED_QUANTITY
    slot_name: str = UNASSIGNED_SLOT
    attachments: list[LoadoutAttachment] = dataclasses.field(default_factory=list)

    def problems(self) -> list[str]:
        """Describes why the item is invalid, if it is."""
        result = []
        if self.quantity != UNLIMITED_QUANTITY and self.quantity <= 0:
            result.append(f"quantity {self.quantity} is neither {UNLIMITED_QUANTITY} nor positive")
        if self.slot_name != UNASSIGNED_SLOT and self.slot_name not in _SLOT_NAMES:
            result.append(f"unknown slot {self.slot_name!r}")
        return result

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "className": self.class_name,
            "quantity": self.quantity,
            "slotName": self.slot_name,
            "attachments": self.attachments,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "LoadoutItem":
        """Creates a LoadoutItem from its JSON object."""
        return cls(
            class_name=str(o.get("className") or ""),
            quantity=int(jsonenc.get_or_default(o, "quantity", UNLIMITED_QUANTITY)),
            slot_name=str(o.get("slotName") or UNASSIGNED_SLOT),
            attachments=[
                LoadoutAttachment.from_json(a) for a in jsonenc.object_list(o.get("attachments"))
            ],
        )


@dataclasses.dataclass
class TraderNpc:
    """A trader, and what it trades in."""

    npc_id: int
    class_name: str
    given_name: str
    role: str
    position: Vector = dataclasses.field(default_factory=lambda: [0, 0, 0])
    orientation: Vector = dataclasses.field(default_factory=lambda: [0, 0, 0])
    categories_id: list[str] = dataclasses.field(default_factory=list)
    currencies_accepted: list[str] = dataclasses.field(default_factory=list)
    loadouts: list[LoadoutItem] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "npcId": self.npc_id,
            "className": self.class_name,
            "givenName": self.given_name,
            "role": self.role,
            "position": self.position,
            "orientation": self.orientation,
            "categoriesId": self.categories_id,
            "currenciesAccepted": self.currencies_accepted,
            "loadouts": self.loadouts,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "TraderNpc":
        """Creates a TraderNpc from its JSON object."""
        return cls(
            npc_id=int(o["npcId"]),
            class_name=str(o.get("className") or ""),
            given_name=str(o.get("givenName") or ""),
            role=str(o.get("role") or ""),
            position=vector(o.get("position")),
            orientation=vector(o.get("orientation")),
            categories_id=jsonenc.str_list(o.get("categoriesId")),
            currencies_accepted=jsonenc.str_list(o.get("currenciesAccepted")),
            loadouts=[LoadoutItem.from_json(i) for i in jsonenc.object_list(o.get("loadouts"))],
        )


@dataclasses.dataclass
class TraderObject:
    """A static object placed around traders."""

    class_name: str = ""
    position: Vector = dataclasses.field(default_factory=lambda: [0, 0, 0])
    orientation: Vector = dataclasses.field(default_factory=lambda: [0, 0, 0])

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "className": self.class_name,
            "position": self.position,
            "orientation": self.orientation,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "TraderObject":
        """Creates a TraderObject from its JSON object."""
        return cls(
            class_name=str(o.get("className") or ""),
            position=vector(o.get("position")),
            orientation=vector(o.get("orientation")),
        )


@dataclasses.dataclass
class AcceptedStates:
    """Which damaged item states traders buy, and at what price coefficient."""

    worn: bool = True
    damaged: bool = True
    badly_damaged: bool = True
    coefficient_worn: float = DEFAULT_COEFFICIENT_WORN
    coefficient_damaged: float = DEFAULT_COEFFICIENT_DAMAGED
    coefficient_badly_damaged: float = DEFAULT_COEFFICIENT_BADLY_DAMAGED

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "worn": self.worn,
            "damaged": self.damaged,
            "badly_damaged": self.badly_damaged,
            "coefficientWorn": self.coefficient_worn,
            "coefficientDamaged": self.coefficient_damaged,
            "coefficientBadlyDamaged": self.coefficient_badly_damaged,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "AcceptedStates":
        """Creates AcceptedStates from either of its JSON forms.

        The editor's own form has boolean ``worn``, ``damaged`` and
        ``badly_damaged`` fields. Older files have numeric ``acceptWorn``,
        ``acceptDamaged`` and ``acceptBadlyDamaged`` fields, where ``1``
        means accepted. The coefficient of a state that is not accepted is
        always 0.
        """
        if "acceptWorn" in o or "acceptDamaged" in o or "acceptBadlyDamaged" in o:
            worn = o.get("acceptWorn") == 1
            damaged = o.get("acceptDamaged") == 1
            badly_damaged = o.get("acceptBadlyDamaged") == 1
        else:
            worn = bool(o.get("worn"))
            damaged = bool(o.get("damaged"))
            badly_damaged = bool(o.get("badly_damaged"))
        return cls(
            worn=worn,
            damaged=damaged,
            badly_damaged=badly_damaged,
            coefficient_worn=float(o.get("coefficientWorn") or 0.0) if worn else 0.0,
            coefficient_damaged=float(o.get("coefficientDamaged") or 0.0) if damaged else 0.0,
            coefficient_badly_damaged=(
                float(o.get("coefficientBadlyDamaged") or 0.0) if badly_damaged else 0.0
            ),
        )


@dataclasses.dataclass
class GeneralSettings:
    """Contents of the general settings file."""

    version: str
    server_id: str
    licenses: list[License] = dataclasses.field(default_factory=list)
    accepted_states: AcceptedStates = dataclasses.field(default_factory=AcceptedStates)
    traders: list[TraderNpc] = dataclasses.field(default_factory=list)
    trader_objects: list[TraderObject] = dataclasses.field(default_factory=list)

    def to_json(self) -> jsonenc.Object:
        """Implements jsonenc.Encodable."""
        return {
            "version": self.version,
            "serverID": self.server_id,
            "licenses": self.licenses,
            "acceptedStates": self.accepted_states,
            "traders": self.traders,
            "traderObjects": self.trader_objects,
        }

    @classmethod
    def from_json(cls, o: jsonenc.Object) -> "GeneralSettings":
        """Creates GeneralSettings from its JSON object."""
        accepted_states = o.get("acceptedStates")
        return cls(
            version=str(o.get("version") or ""),
            server_id=str(o.get("serverID") or ""),
            licenses=[License.from_json(lic) for lic in jsonenc.object_list(o.get("licenses"))],
            accepted_states=(
                AcceptedStates.from_json(accepted_states)
                if isinstance(accepted_states, dict)
                else AcceptedStates()
            ),
            traders=[TraderNpc.from_json(t) for t in jsonenc.object_list(o.get("traders"))],
            trader_objects=[
                TraderObject.from_json(t) for t in jsonenc.object_list(o.get("traderObjects"))
            ],
        )


def vector(v: Any) -> Vector:
    """Returns ``v`` as an [x, y, z] vector, or the zero vector if it is not one."""
    if isinstance(v, list) and len(v) == 3 and all(isinstance(c, (int, float)) for c in v):
        return list(v)
    return [0, 0, 0]