"""
reactstarter.resolver - Option Resolution
=========================================

Turns raw command-line values (or answers to the interactive prompts) into
a validated, immutable ``ProjectOptions``. Nothing here touches the
filesystem or runs a process, so an invalid name or package manager is
always rejected before any directory is created.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from reactstarter.errors import InvalidPackageManagerError
from reactstarter.models import Feature, PackageManager, ProjectOptions, validate_project_name
from reactstarter.settings import StarterSettings


def parse_package_manager(value: str | PackageManager) -> PackageManager:
    """
    Parse a package manager name (case-insensitive).

    Raises
    ------
    InvalidPackageManagerError
        If ``value`` is not npm, pnpm, yarn or bun.

    Examples
    --------
    >>> parse_package_manager("Bun")
    <PackageManager.BUN: 'bun'>
    """
    if isinstance(value, PackageManager):
        return value

    try:
        return PackageManager(value.strip().lower())
    except ValueError:
        valid = ", ".join(pm.value for pm in PackageManager)
        raise InvalidPackageManagerError(
            f"Invalid package manager '{value}'. Valid: {valid}"
        ) from None


def resolve_features(
    *,
    tailwind: bool = False,
    i18n: bool = False,
    auth_pages: bool = False,
    data_fetching: bool = False,
    all_features: bool = False,
) -> frozenset[Feature]:
    """
    Combine feature flags into a set.

    ``all_features`` (``--all``/``-a``) enables every feature. Repeating a
    feature has no additional effect.
    """
    if all_features:
        return frozenset(Feature)

    flags = {
        Feature.TAILWIND: tailwind,
        Feature.I18N: i18n,
        Feature.AUTH_PAGES: auth_pages,
        Feature.DATA_FETCHING: data_fetching,
    }
    return frozenset(feature for feature, enabled in flags.items() if enabled)


def resolve_options(
    name: str,
    *,
    package_manager: str | PackageManager | None = None,
    features: Iterable[Feature] | None = None,
    init_git: bool | None = None,
    output_dir: Path | None = None,
    template_url: str | None = None,
    verbose: bool = False,
    settings: StarterSettings | None = None,
) -> ProjectOptions:
    """
    Build ``ProjectOptions`` from raw values, falling back to settings.

    Parameters
    ----------
    name : str
        Project name as typed; normalized by ``validate_project_name``.

    package_manager : str | PackageManager | None
        Explicit choice, else ``settings.package_manager``.

    features : Iterable[Feature] | None
        Features requested on the command line or in prompts. They
        replace the settings' default features; None (no feature input at
        all) selects ``settings.features``.

    init_git : bool | None
        Explicit choice, else ``settings.init_git``.

    output_dir : Path | None
        Parent directory of the project (default: cwd).

    template_url : str | None
        Template override, else ``settings.template_url``.

    verbose : bool
        Show subprocess output.

    settings : StarterSettings | None
        Defaults (built-in defaults if omitted).

    Returns
    -------
    ProjectOptions
        Frozen, validated options.

    Raises
    ------
    InvalidNameError
        If the name is empty or malformed.
    InvalidPackageManagerError
        If the package manager is unknown.
    """
    settings = settings or StarterSettings()

    validated_name = validate_project_name(name)
    pm = parse_package_manager(
        package_manager if package_manager is not None else settings.package_manager
    )

    return ProjectOptions(
        name=validated_name,
        package_manager=pm,
        features=frozenset(settings.features if features is None else features),
        init_git=settings.init_git if init_git is None else init_git,
        output_dir=output_dir or Path.cwd(),
        template_url=template_url or settings.template_url,
        verbose=verbose,
    )
