"""Environment validation for loglinear-cost dependencies."""

import sys
import warnings
from packaging import version


def check_environment(min_numpy: str = "1.24", min_scipy: str = "1.10") -> None:
    """Check that environment meets minimum dependency requirements.

    Parameters
    ----------
    min_numpy : str, default="1.24"
        Minimum required NumPy version
    min_scipy : str, default="1.10"
        Minimum required SciPy version

    Raises
    ------
    RuntimeError
        If any dependency requirements are not met

    Examples
    --------
    >>> check_environment()  # Uses default minimums
    >>> check_environment(min_numpy="1.26", min_scipy="1.11")
    """
    errors = []

    if sys.version_info < (3, 10):
        errors.append(f"Python 3.10+ required, found {sys.version_info.major}.{sys.version_info.minor}")

    try:
        import numpy as np
        if version.parse(np.__version__) < version.parse(min_numpy):
            errors.append(f"NumPy {min_numpy}+ required, found {np.__version__}")
    except ImportError:
        errors.append("NumPy not installed - required for array operations")

    try:
        import scipy
        if version.parse(scipy.__version__) < version.parse(min_scipy):
            errors.append(f"SciPy {min_scipy}+ required, found {scipy.__version__}")
    except ImportError:
        errors.append("SciPy not installed - required for the optimizer driver")

    optional_warnings = []
    try:
        import tomli_w  # noqa: F401
    except ImportError:
        optional_warnings.append("tomli-w not found - Settings.to_toml unavailable")

    if errors:
        error_msg = "Environment validation failed:\n" + "\n".join(f"  - {err}" for err in errors)

        if optional_warnings:
            error_msg += "\n\nWarnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)

        error_msg += "\n\nTo install required dependencies:\n  pip install numpy scipy packaging"
        raise RuntimeError(error_msg)

    if optional_warnings:
        warning_msg = "Environment warnings:\n" + "\n".join(f"  - {warn}" for warn in optional_warnings)
        warnings.warn(warning_msg, UserWarning)


def get_dependency_versions() -> dict:
    """Get versions of all relevant dependencies.

    Returns
    -------
    dict
        Dictionary mapping package names to version strings
    """
    versions = {
        'python': f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}"
    }

    for name in ('numpy', 'scipy', 'packaging', 'tomli_w', 'yaml'):
        try:
            module = __import__(name)
            versions[name] = getattr(module, '__version__', 'unknown')
        except ImportError:
            versions[name] = 'not installed'

    try:
        import tomllib  # noqa: F401
        versions['tomllib'] = 'built-in (3.11+)'
    except ImportError:
        try:
            import tomli
            versions['tomli'] = tomli.__version__
        except ImportError:
            versions['tomli'] = 'not installed'

    return versions


def format_environment_info() -> str:
    """Render :func:`get_dependency_versions` as an aligned text block."""
    lines = ["loglinear-cost - Environment Information", "=" * 40]
    for pkg, pkg_version in get_dependency_versions().items():
        lines.append(f"  {pkg:12}: {pkg_version}")
    lines.append(f"  {'platform':12}: {sys.platform}")
    return "\n".join(lines)
