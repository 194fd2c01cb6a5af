"""Serialization module — JSON documents for plans, profiles and ForgeData."""

from forge_engine.serialization.forge_json import (
    forge_data_from_dict,
    forge_data_from_json_string,
    forge_data_to_dict,
    forge_data_to_json_string,
    plan_from_dict,
    plan_to_dict,
    profile_from_dict,
    profile_to_dict,
)

__all__ = [
    "forge_data_from_dict",
    "forge_data_from_json_string",
    "forge_data_to_dict",
    "forge_data_to_json_string",
    "plan_from_dict",
    "plan_to_dict",
    "profile_from_dict",
    "profile_to_dict",
]
