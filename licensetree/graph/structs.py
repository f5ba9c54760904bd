"""Ident/descriptor/locator helpers: parsing, stringifying, devirtualizing."""

from __future__ import annotations

from licensetree.graph.models import (
    AnyDescriptor,
    AnyLocator,
    Descriptor,
    Ident,
    Locator,
)


def parse_ident(text: str) -> Ident:
    """Parse ``name`` or ``@scope/name``.

    Raises ``ValueError`` on an empty name or a scope without a name.
    """
    if text.startswith("@"):
        scope, sep, name = text[1:].partition("/")
        if not sep or not scope or not name:
            raise ValueError(f"invalid ident: {text!r}")
        return Ident(scope=scope, name=name)
    if not text:
        raise ValueError("invalid ident: empty name")
    return Ident(scope=None, name=text)


def stringify_ident(ident: Ident) -> str:
    if ident.scope:
        return f"@{ident.scope}/{ident.name}"
    return ident.name


def stringify_descriptor(descriptor: AnyDescriptor) -> str:
    return f"{stringify_ident(descriptor.ident)}@{descriptor.range}"


def stringify_locator(locator: AnyLocator) -> str:
    return f"{stringify_ident(locator.ident)}@{locator.reference}"


def devirtualize_descriptor(descriptor: AnyDescriptor) -> Descriptor:
    """Return the physical descriptor behind *descriptor*."""
    if descriptor.is_virtual:
        return descriptor.physical
    return descriptor


def devirtualize(descriptor: AnyDescriptor) -> str:
    """Canonical hash: two instantiations of one dependency share it."""
    return devirtualize_descriptor(descriptor).descriptor_hash


def devirtualize_locator(locator: AnyLocator) -> Locator:
    if locator.is_virtual:
        return locator.physical
    return locator


def descriptor_sort_key(descriptor: AnyDescriptor) -> tuple[str, str, str]:
    # Virtual descriptors sort before their physical counterpart.
    return (
        stringify_ident(descriptor.ident),
        "0" if descriptor.is_virtual else "1",
        descriptor.range,
    )
