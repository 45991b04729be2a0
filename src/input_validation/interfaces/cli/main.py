import argparse
import importlib
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import colorlog

from input_validation import __version__ as _PACKAGE_VERSION
from input_validation.core.errors import ConfigurationError
from input_validation.core.properties import ValidatedProperty, observable_properties


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_target(target: str) -> type:
    """Import a view model class given as ``package.module:ClassName``.

    Raises:
        ValueError: If the target isn't in ``module:ClassName`` form or the
            attribute isn't a BaseViewModel subclass.
        ImportError: If the module can't be imported.
        AttributeError: If the module has no such attribute.
    """
    from input_validation.viewmodel import BaseViewModel

    module_name, sep, class_name = target.partition(":")
    if not sep or not module_name or not class_name:
        raise ValueError(f"Target must look like 'package.module:ClassName', got '{target}'")

    module = importlib.import_module(module_name)
    cls = getattr(module, class_name)
    if not isinstance(cls, type) or not issubclass(cls, BaseViewModel):
        raise ValueError(f"{target} is not a BaseViewModel subclass")
    return cls


def _instantiate(target: str) -> Tuple[Optional[object], int]:
    """Import and construct the target view model.

    Returns:
        (view_model, 0) on success, (None, exit_code) on failure.
    """
    try:
        cls = _load_target(target)
    except (ImportError, AttributeError) as e:
        logging.error("Failed to import %s: %s", target, e)
        return None, 3
    except ValueError as e:
        logging.error("%s", e)
        return None, 2

    try:
        return cls(), 0
    except ConfigurationError as e:
        logging.error("Invalid view model declaration %s: %s", target, e)
        return None, 2


def _report_path(report_arg, class_name: str, suffix: str) -> Path:
    if report_arg is True:
        report_dir = Path.cwd()
    else:
        report_dir = Path(report_arg)
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir / f"{class_name}_validation.{suffix}"


def cmd_describe(args: argparse.Namespace) -> int:
    """List the observable and validated properties of a view model.

    Constructing the view model also runs the validator completeness check.

    Returns:
        0 if the declarations are consistent
        2 if the declarations are invalid
        3 if the target could not be imported
    """
    vm, code = _instantiate(args.target)
    if vm is None:
        return code

    cls = type(vm)
    print(f"{cls.__module__}:{cls.__name__}")
    for name, prop in observable_properties(cls).items():
        type_name = "any"
        if prop.value_type is not None:
            if isinstance(prop.value_type, tuple):
                type_name = " | ".join(t.__name__ for t in prop.value_type)
            else:
                type_name = prop.value_type.__name__
        flags = " (read-only)" if prop.readonly else ""
        print(f"  {name}: {type_name} = {prop.default!r}{flags}")
        if isinstance(prop, ValidatedProperty):
            print(f"    validated: {prop.error_message}")

    logging.info("%s declares %d validated properties", cls.__name__, len(vm.validated_properties))
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Construct a view model, apply values and report property validity.

    Values are assigned through the normal property setters, so type
    mismatches are ignored exactly as they would be for a bound view.

    Returns:
        0 if all validated properties pass
        2 if any property fails or the declarations are invalid
        3 if the target could not be imported
    """
    from input_validation.validation.config import load_values

    vm, code = _instantiate(args.target)
    if vm is None:
        return code

    cls = type(vm)
    properties = observable_properties(cls)

    values_arg = getattr(args, "values", None)
    if values_arg:
        try:
            values = load_values(Path(values_arg))
        except (FileNotFoundError, ValueError) as e:
            logging.error("%s", e)
            return 2

        for name, value in values.items():
            prop = properties.get(name)
            if prop is None:
                logging.warning("Unknown property '%s' on %s; skipped", name, cls.__name__)
                continue
            if prop.readonly:
                logging.warning("Property '%s' is read-only; skipped", name)
                continue
            setattr(vm, name, value)
            if getattr(vm, name) != value:
                logging.warning(
                    "Value %r for '%s' was not accepted (expected %s)",
                    value,
                    name,
                    prop.value_type,
                )

    report = vm.validate_all()
    print(report.to_console_summary())

    if getattr(args, "report", False):
        report_path = _report_path(args.report, cls.__name__, "md")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_markdown())
        logging.info("Markdown report saved: %s", report_path)

    if getattr(args, "report_json", False):
        report_path = _report_path(args.report_json, cls.__name__, "json")
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(report.to_json())
        logging.info("JSON report saved: %s", report_path)

    if report.has_errors():
        logging.warning(
            "Validation failed for %s: %d invalid properties",
            cls.__name__,
            report.get_error_count(),
        )
        return 2

    logging.info("Validation passed for %s", cls.__name__)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="input-validation",
        description=f"Input Validation (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_describe = sub.add_parser(
        "describe", help="List a view model's properties and check its validator declarations"
    )
    p_describe.add_argument("target", help="View model class as package.module:ClassName")
    p_describe.set_defaults(func=cmd_describe)

    p_validate = sub.add_parser("validate", help="Validate a view model populated from YAML")
    p_validate.add_argument("target", help="View model class as package.module:ClassName")
    p_validate.add_argument(
        "--values",
        default=None,
        help="YAML file mapping property names to values",
    )
    p_validate.add_argument(
        "--report",
        nargs="?",
        const=True,
        default=False,
        help="Generate a Markdown report. Optionally specify a directory (default: current directory).",
    )
    p_validate.add_argument(
        "--report-json",
        nargs="?",
        const=True,
        default=False,
        help="Generate a JSON report. Optionally specify a directory (default: current directory).",
    )
    p_validate.set_defaults(func=cmd_validate)

    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
