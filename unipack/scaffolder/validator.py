"""Field validation for :class:`~unipack.scaffolder.generator.PackageConfig`.

Every predicate returns an ``(is_valid, message)`` tuple where *message* is
``None`` on success.  Validation never raises and never normalises the
value it inspects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from unipack.utils import print_warning

if TYPE_CHECKING:
    from unipack.scaffolder.generator import PackageConfig

ValidationResult = tuple[bool, str | None]


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def validate_package_name(package_name: str) -> ValidationResult:
    if _is_blank(package_name):
        return False, "Package name cannot be empty or whitespace."
    if " " in package_name:
        return False, "Package name cannot contain spaces."
    return True, None


def validate_package_description(package_description: str) -> ValidationResult:
    """Descriptions are free-form; any value is accepted."""
    return True, None


def validate_package_author(package_author: str) -> ValidationResult:
    if _is_blank(package_author):
        return False, "Package author cannot be empty or whitespace."
    return True, None


def validate_package_author_email(package_author_email: str) -> ValidationResult:
    """Only checks the e-mail is present; its format is not inspected."""
    if _is_blank(package_author_email):
        return False, "Package author email cannot be empty or whitespace."
    return True, None


def validate_organization(organization: str) -> ValidationResult:
    if _is_blank(organization):
        return False, "Organization cannot be empty or whitespace."
    return True, None


FIELD_VALIDATORS: dict[str, Callable[[str], ValidationResult]] = {
    "package_name": validate_package_name,
    "package_description": validate_package_description,
    "package_author": validate_package_author,
    "package_author_email": validate_package_author_email,
    "organization": validate_organization,
}


def validation_errors(config: PackageConfig) -> dict[str, str]:
    """Return ``{field: message}`` for every field of *config* that fails."""
    errors: dict[str, str] = {}
    for field_name, validator in FIELD_VALIDATORS.items():
        ok, message = validator(getattr(config, field_name))
        if not ok:
            errors[field_name] = message or "Invalid value."
    return errors


def is_valid(config: PackageConfig) -> bool:
    """Return ``True`` only when every field of *config* passes.

    Each failure is reported as a console warning; all fields are checked
    even after the first failure.
    """
    errors = validation_errors(config)
    for message in errors.values():
        print_warning(message)
    return not errors
