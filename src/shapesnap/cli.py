"""
Command-line interface for shapesnap.

Provides commands for approximating an image and writing a default config.
"""

import argparse
import sys

from shapesnap.config import load_config, save_default_config
from shapesnap.errors import ShapesnapError
from shapesnap.tracer import configure_tracer, get_tracer


def build_parser():
    parser = argparse.ArgumentParser(
        prog="shapesnap",
        description="shapesnap: approximate a raster image with translucent shapes",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    
    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    
    run_parser = subparsers.add_parser("run", help="Approximate an image")
    run_parser.add_argument("--input", "-i", required=True, help="Input image file")
    run_parser.add_argument("--out", "-o", required=True, help="Output directory")
    run_parser.add_argument("--config", "-c", default=None, help="Path to YAML configuration file")
    run_parser.add_argument("--shapes", "-n", type=int, default=None, help="Number of shapes to place")
    run_parser.add_argument("--attempts", "-a", type=int, default=None, help="Attempts per shape")
    run_parser.add_argument("--alpha", type=int, default=None, help="Opacity of every shape, 0-255")
    run_parser.add_argument("--kinds", nargs="+", default=None, help="Allowed shape kinds")
    run_parser.add_argument("--seed", type=int, default=None, help="Random seed")
    run_parser.add_argument("--max-edge", type=int, default=None, help="Downscale input to this size")
    run_parser.add_argument("--trace", action="store_true", help="Enable runtime tracing")
    run_parser.add_argument(
        "--trace-level",
        default="INFO",
        choices=["ERROR", "WARN", "INFO", "DEBUG"],
        help="Trace log level",
    )
    run_parser.add_argument("--trace-file", default=None, help="Path to write trace logs")
    run_parser.add_argument("--trace-json", action="store_true", help="Enable JSON trace output")
    
    init_parser = subparsers.add_parser("init-config", help="Create default config file")
    init_parser.add_argument(
        "--out", "-o",
        default="shapesnap_config.yaml",
        help="Output path for config file",
    )
    
    return parser


def main(argv=None):
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if args.command == "run":
        return handle_run(args)
    elif args.command == "init-config":
        return handle_init_config(args)
    
    parser.print_help()
    return 0


def apply_overrides(config, args):
    """Apply command-line overrides on top of the loaded config."""
    search = config.search
    if args.shapes is not None:
        search.amount_of_shapes = args.shapes
    if args.attempts is not None:
        search.amount_of_attempts = args.attempts
    if args.alpha is not None:
        search.alpha = args.alpha
    if args.kinds:
        search.shapes = args.kinds
    if args.seed is not None:
        search.seed = args.seed
    if args.max_edge is not None:
        config.output.max_edge = args.max_edge
    return config


def handle_run(args):
    """Handle the run command."""
    config = apply_overrides(load_config(args.config), args)
    
    configure_tracer(
        enabled=args.trace or config.tracing.enabled,
        level=args.trace_level if args.trace else config.tracing.level,
        file_path=args.trace_file or config.tracing.file_path,
        json_output=args.trace_json or config.tracing.json_output,
    )
    
    tracer = get_tracer()
    
    def progress(index, record, difference):
        print(f"  shape {index + 1}/{config.search.amount_of_shapes}: "
              f"{record.geometry.kind} difference={difference:.6f}")
    
    try:
        from shapesnap.pipeline import run_snap
        
        with tracer.span("cli_run", module="cli"):
            result = run_snap(args.input, args.out, config=config, callback=progress)
    except (ShapesnapError, OSError, ValueError) as e:
        tracer.event(f"Run failed: {e}", level="ERROR")
        print(f"\nError: {e}", file=sys.stderr)
        return 1
    finally:
        tracer.config.close()
    
    print(f"\nApproximation completed.")
    print(f"  Shapes placed: {len(result.shapes)}")
    print(f"  Difference: {result.initial_score:.6f} -> {result.final_score:.6f}")
    print(f"\nOutputs saved to: {args.out}/")
    
    return 0


def handle_init_config(args):
    """Handle the init-config command."""
    save_default_config(args.out)
    print(f"Default configuration saved to: {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
