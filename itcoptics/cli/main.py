"""
Main CLI entry point for itc-optics.
"""

import argparse
import sys

from itcoptics.core.logging_config import LOG_LEVELS, setup_logging, get_logger

logger = get_logger("cli.main")


def coverage_cmd(args):
    """Wavelength coverage command."""
    from itcoptics.core.config import load_config
    from itcoptics.instrument.factory import GratingOpticsFactory
    from itcoptics.instrument.grating import resolve_calibration_directory

    logger.info(f"Loading configuration from {args.config}")
    config = load_config(args.config)
    resolve_calibration_directory(config, args.config)
    optics = GratingOpticsFactory.from_config(config)

    # Command line wins over the configured shift
    shift = args.shift if args.shift is not None else config.get("ifu_shift")

    print(f"Grating:            {optics.grating_name}")
    print(f"Detector:           {optics.detector_name}")
    print(f"Namespace:          {optics.namespace}")
    print(f"Dispersion:         {optics.dispersion():.6f} nm/pixel")
    print(f"Pixel width:        {optics.pixel_width():.6f} nm (binning {optics.spectral_binning})")
    print(f"Resolving power:    {optics.grating_resolution():.1f}")
    print(f"Coverage:           {optics.start():.3f} - {optics.end():.3f} nm")

    if shift is not None:
        if not hasattr(optics, "ifu2_windows"):
            raise ValueError(f"{type(optics).__name__} has no IFU-2 windows")
        (start_a, end_a), (start_b, end_b) = optics.ifu2_windows(float(shift))
        print(f"IFU-2 window 1:     {start_a:.3f} - {end_a:.3f} nm")
        print(f"IFU-2 window 2:     {start_b:.3f} - {end_b:.3f} nm")

    if args.wavelength is not None:
        for wavelength in args.wavelength:
            print(f"Transmission({wavelength:g} nm): {optics.transmission_at(wavelength):.4f}")

    logger.info("Coverage calculation complete")


def gratings_cmd(args):
    """List gratings command."""
    from itcoptics.calibration.table import CalibrationTable

    table = CalibrationTable(args.directory)
    namespaces = [args.namespace] if args.namespace else sorted(table.namespaces)

    for namespace in namespaces:
        print(f"{namespace}:")
        for name in table.list_gratings(namespace):
            print(f"  {name}")


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="itc-optics: grating dispersion, coverage and transmission",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    coverage_parser = subparsers.add_parser(
        "coverage", help="Show dispersion and wavelength coverage of a configured setup"
    )
    coverage_parser.add_argument(
        "config", type=str, help="Path to configuration file (YAML or JSON)"
    )
    coverage_parser.add_argument(
        "--shift", type=float, default=None, help="IFU-2 window shift in nm (default: ifu_shift from the config)"
    )
    coverage_parser.add_argument(
        "--wavelength",
        type=float,
        nargs="+",
        default=None,
        help="Wavelength(s) in nm at which to report the grating transmission",
    )
    coverage_parser.set_defaults(func=coverage_cmd)

    gratings_parser = subparsers.add_parser(
        "gratings", help="List the gratings of a calibration directory"
    )
    gratings_parser.add_argument("directory", type=str, help="Calibration directory")
    gratings_parser.add_argument(
        "--namespace", type=str, default=None, help="Only list this namespace"
    )
    gratings_parser.set_defaults(func=gratings_cmd)

    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error executing command: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
