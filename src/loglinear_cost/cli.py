"""Command-line interface for training and checking the cost function."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import Settings, check_environment, get_config, get_environment_seed, set_config
from .config.validate import format_environment_info
from .core import CostFunctionError, LogLinearCostFunction
from .data import load_matrix, make_synthetic_problem
from .optimize import check_gradient, initial_parameters, minimize_cost

logger = logging.getLogger(__name__)

# Console handler installed by _setup_logging; raised to DEBUG by verbose settings
_CONSOLE_HANDLER: Optional[logging.Handler] = None


def _setup_logging(verbose: bool = False, log_file: Optional[Path] = None) -> None:
    """Configure root logger to log to stderr and optionally a log file.

    Args:
        verbose: If ``True`` set console log level to ``DEBUG`` else ``INFO``.
        log_file: Optional path to a log file, always written at ``DEBUG``.
    """
    global _CONSOLE_HANDLER

    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    handlers: List[logging.Handler] = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.INFO)
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)
    _CONSOLE_HANDLER = console_handler

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(level=logging.DEBUG, handlers=handlers)
    logging.debug("Logging initialised. Log file: %s", log_file)


def _load_config(config_path: Path | str) -> Dict[str, Any]:
    """Load JSON or YAML configuration.

    Args:
        config_path: Path to a ``.json``, ``.yml`` or ``.yaml`` file.

    Returns:
        Parsed configuration as a dictionary.

    Raises:
        ValueError: If the file extension is unsupported.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if path.suffix.lower() == ".json":
        return json.loads(path.read_text())
    if path.suffix.lower() in {".yml", ".yaml"}:
        import yaml

        return yaml.safe_load(path.read_text()) or {}

    raise ValueError(f"Unsupported config type: {path.suffix}")


def _resolve_settings(args: argparse.Namespace) -> Settings:
    """Merge config file, command-line overrides and the environment seed.

    Without ``--config`` the default TOML locations are searched before
    falling back to ``--preset``. An unset seed is taken from
    ``LOGLINEAR_COST_SEED`` when present. The result becomes the global
    configuration.
    """
    if args.config is None:
        settings = get_config(preset=args.preset, reload=True)
    elif Path(args.config).suffix.lower() == ".toml":
        settings = Settings.from_toml(args.config)
    else:
        settings = Settings.from_dict(_load_config(args.config))

    overrides = {}
    for name in ("sigma_squared", "max_iterations", "optimizer_method", "random_seed"):
        value = getattr(args, name, None)
        if value is not None:
            overrides[name] = value
    if settings.random_seed is None:
        env_seed = get_environment_seed()
        if env_seed is not None:
            logger.debug("Using random seed %d from environment", env_seed)
            overrides["random_seed"] = env_seed
    if overrides:
        settings = settings.update(**overrides)

    if settings.verbose and _CONSOLE_HANDLER is not None:
        _CONSOLE_HANDLER.setLevel(logging.DEBUG)

    # Also seeds the global RNGs when random_seed is set
    set_config(settings)
    return settings


def _build_cost_function(args: argparse.Namespace, settings: Settings) -> LogLinearCostFunction:
    if args.synthetic is not None:
        n_examples, n_features, n_classes = args.synthetic
        problem = make_synthetic_problem(n_examples, n_features, n_classes,
                                         random_state=settings.random_seed)
        features, outcome = problem.features, problem.outcome
        logger.info("Generated synthetic problem: %d examples, %d features, %d classes",
                    n_examples, n_features, n_classes)
    else:
        if args.features is None or args.outcome is None:
            raise ValueError("Either --synthetic or both --features and --outcome are required")
        features = load_matrix(args.features)
        outcome = load_matrix(args.outcome)
        logger.info("Loaded features %s and outcome %s", features.shape, outcome.shape)

    return LogLinearCostFunction(features, outcome,
                                 sigma_squared=settings.sigma_squared,
                                 log_sum_cutoff=settings.log_sum_cutoff)


# -----------------------------------------------------------------------------
# Sub-command implementations
# -----------------------------------------------------------------------------

def _cmd_train(args: argparse.Namespace) -> int:
    """Entry point for the ``train`` sub-command."""
    try:
        settings = _resolve_settings(args)
        cost_function = _build_cost_function(args, settings)
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Failed to prepare training run: %s", exc)
        return 1

    theta0 = initial_parameters(cost_function, settings.initial_scale)
    try:
        result = minimize_cost(cost_function, theta0,
                               method=settings.optimizer_method,
                               max_iterations=settings.max_iterations,
                               tolerance=settings.tolerance)
    except CostFunctionError as exc:
        logger.error("Cost evaluation failed: %s", exc)
        return 1

    summary = {
        "cost": result.cost,
        "initial_cost": result.cost_history[0],
        "iterations": result.iterations,
        "converged": result.converged,
        "gradient_norm": result.gradient_norm,
        "message": result.message,
    }
    print(json.dumps(summary, indent=2))
    return 0 if result.converged else 2


def _cmd_check_gradient(args: argparse.Namespace) -> int:
    """Entry point for the ``check-gradient`` sub-command."""
    try:
        settings = _resolve_settings(args)
        cost_function = _build_cost_function(args, settings)
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Failed to prepare gradient check: %s", exc)
        return 1

    theta = initial_parameters(cost_function, scale=args.scale)
    difference = check_gradient(cost_function, theta, epsilon=args.epsilon)
    passed = difference <= args.threshold
    logger.info("Max gradient difference %.3e (threshold %.1e): %s",
                difference, args.threshold, "OK" if passed else "FAILED")
    print(json.dumps({"max_difference": difference, "passed": passed}, indent=2))
    return 0 if passed else 2


def _cmd_env(args: argparse.Namespace) -> int:
    """Entry point for the ``env`` sub-command."""
    print(format_environment_info())
    try:
        check_environment()
    except RuntimeError as exc:
        logger.error("%s", exc)
        return 1
    return 0


# -----------------------------------------------------------------------------
# Argument parsing
# -----------------------------------------------------------------------------

def _add_problem_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--features", type=str, help="Feature matrix (.npy/.csv/.txt).")
    parser.add_argument("--outcome", type=str, help="Outcome matrix (.npy/.csv/.txt).")
    parser.add_argument(
        "--synthetic",
        type=int,
        nargs=3,
        metavar=("EXAMPLES", "FEATURES", "CLASSES"),
        help="Generate a random problem instead of loading files.",
    )
    parser.add_argument("--config", type=str, help="Path to JSON/YAML/TOML settings file.")
    parser.add_argument(
        "--preset",
        choices=["default", "strong_prior", "weak_prior"],
        default="default",
        help="Settings preset used when no --config is given.",
    )
    parser.add_argument("--sigma-squared", dest="sigma_squared", type=float,
                        help="Override the Gaussian prior variance.")
    parser.add_argument("--seed", dest="random_seed", type=int, help="Random seed.")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="loglinear-cost",
        description="Conditional-likelihood cost function command-line interface",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging output.",
    )
    parser.add_argument("--log-file", type=Path, help="Also write DEBUG logs to this file.")

    sub_parsers = parser.add_subparsers(dest="command", required=True)

    # train -------------------------------------------------------------------
    train_parser = sub_parsers.add_parser("train", help="Minimise the cost for a data set")
    _add_problem_arguments(train_parser)
    train_parser.add_argument("--max-iterations", dest="max_iterations", type=int,
                              help="Override the optimizer iteration limit.")
    train_parser.add_argument("--method", dest="optimizer_method",
                              choices=["L-BFGS-B", "BFGS", "CG"],
                              help="Override the optimizer method.")
    train_parser.set_defaults(func=_cmd_train)

    # check-gradient ----------------------------------------------------------
    check_parser = sub_parsers.add_parser(
        "check-gradient", help="Compare analytic and finite-difference gradients"
    )
    _add_problem_arguments(check_parser)
    check_parser.add_argument("--scale", type=float, default=0.1,
                              help="Std. dev. of the random evaluation point.")
    check_parser.add_argument("--epsilon", type=float, default=1e-6,
                              help="Finite-difference step.")
    check_parser.add_argument("--threshold", type=float, default=1e-4,
                              help="Maximum allowed absolute difference.")
    check_parser.set_defaults(func=_cmd_check_gradient)

    # env ---------------------------------------------------------------------
    env_parser = sub_parsers.add_parser("env", help="Show dependency versions")
    env_parser.set_defaults(func=_cmd_env)

    return parser


# -----------------------------------------------------------------------------
# Main entry point
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Parse ``argv`` and dispatch to sub-command implementation."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Logging must be set up *after* parsing to respect --verbose flag.
    _setup_logging(verbose=args.verbose, log_file=args.log_file)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
