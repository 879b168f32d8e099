#!/usr/bin/env python3
"""
binprobe CLI
Inspect, dump and convert binary files from the terminal.
"""

import sys
import argparse

try:
    import argcomplete
    ARGCOMPLETE_AVAILABLE = True
except ImportError:
    ARGCOMPLETE_AVAILABLE = False

from binprobe import Document, Encoding, HexDumper, ReportFormatter, SelectionExporter, ViewportGeometry
from binprobe.config import ViewerConfig, create_default_config
from binprobe.exceptions import BinprobeError, DecodeError
from binprobe.logging_config import LEVELS, MODULES, LoggingManager, setup_logging, get_logger
from binprobe.models import LineRange, MIN_BYTES_PER_LINE, MAX_BYTES_PER_LINE

logger = get_logger('cli')

def debug_modules_completer(prefix, parsed_args, **kwargs):
    """Complete the last name of a comma-separated module list."""
    *done, current = prefix.split(',')
    head = ''.join(f'{name},' for name in done)
    chosen = {name.strip() for name in done}
    return [head + name for name in MODULES if name not in chosen and name.startswith(current)]


def parse_range(value: str) -> tuple[int, int]:
    """Parse 'START:END' (inclusive, decimal or 0x hex) for --select."""
    try:
        start_text, end_text = value.split(':')
        return int(start_text, 0), int(end_text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected START:END, got '{value}'")


def grouping_width(value: str) -> int:
    width = int(value, 0)
    if not MIN_BYTES_PER_LINE <= width <= MAX_BYTES_PER_LINE:
        raise argparse.ArgumentTypeError(
            f"width must be between {MIN_BYTES_PER_LINE} and {MAX_BYTES_PER_LINE}"
        )
    return width


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='binprobe - byte-level file inspector')
    parser.add_argument('--config', default='binprobe_config.json',
                        help='Path to viewer configuration file')
    parser.add_argument('--create-config', action='store_true',
                        help='Create default configuration file')
    parser.add_argument('--log-level', default='WARNING', choices=LEVELS,
                        help='Package log level (NONE = silent)')
    debug_arg = parser.add_argument('--debug-modules', type=str,
                                    help=f"Comma-separated modules to log at DEBUG ({', '.join(MODULES)})")
    if ARGCOMPLETE_AVAILABLE:
        debug_arg.completer = debug_modules_completer
    parser.add_argument('--colored', action='store_true', help='Use colored output')

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    info_parser = subparsers.add_parser('info', help='Show size and detected kind of a file')
    info_parser.add_argument('file', help='File to inspect')

    dump_parser = subparsers.add_parser('dump', help='Hex/ASCII dump of the rows in a viewport')
    dump_parser.add_argument('file', help='File to dump')
    dump_parser.add_argument('--width', type=grouping_width, help='Bytes per line (1-64)')
    dump_parser.add_argument('--top', type=float, default=0.0, help='Viewport top')
    dump_parser.add_argument('--bottom', type=float, help='Viewport bottom (default: top + visible rows)')
    dump_parser.add_argument('--row-height', type=float, help='Row height')
    dump_parser.add_argument('--all', action='store_true', help='Dump every row')
    dump_parser.add_argument('--lsb', action='store_true', help='Show bytes with bit order reversed')
    dump_parser.add_argument('--select', type=parse_range, help='Highlight START:END (inclusive)')

    chunks_parser = subparsers.add_parser('chunks', help='List the chunks of a PNG-style container')
    chunks_parser.add_argument('file', help='Container file')

    hist_parser = subparsers.add_parser('histogram', help='Byte value frequencies')
    hist_parser.add_argument('file', help='File to scan')
    hist_parser.add_argument('--top', type=int, default=16, help='Number of byte values to show')

    certs_parser = subparsers.add_parser('certs', help='Summarize PEM or DER certificates')
    certs_parser.add_argument('file', help='Certificate file')

    xml_parser = subparsers.add_parser('xml', help='Show the element tree of an XML file')
    xml_parser.add_argument('file', help='XML file')

    decode_parser = subparsers.add_parser('decode', help='Convert text to bytes')
    decode_parser.add_argument('text', help="Text to decode ('-' reads standard input)")
    decode_parser.add_argument('--encoding', choices=[e.value for e in Encoding], default='hex',
                               help='Encoding of the text')
    decode_parser.add_argument('-o', '--output', help='Write bytes to this file instead of dumping them')

    export_parser = subparsers.add_parser('export', help='Export a byte range')
    export_parser.add_argument('file', help='Source file')
    export_parser.add_argument('--select', type=parse_range, required=True, help='Range START:END (inclusive)')
    export_parser.add_argument('--hex', action='store_true', help='Export as spaced hex text')
    export_parser.add_argument('-o', '--output', help='Output path (default: exported.bin / exported.hex)')

    return parser


def run_dump(args, config: ViewerConfig, doc: Document, use_color: bool) -> str:
    if args.select:
        doc.select(*args.select)

    if args.all:
        line_range = LineRange(0, doc.total_lines)
    else:
        row_height = args.row_height or config.row_height
        bottom = args.bottom if args.bottom is not None else args.top + config.visible_rows * row_height
        line_range = doc.compute_visible_lines(ViewportGeometry(args.top, bottom, row_height))

    dumper = HexDumper(width=doc.bytes_per_line, use_color=use_color,
                       display_lsb=args.lsb or config.display_lsb)
    return dumper.dump(doc.buffer, line_range, doc.selection.range)


def run(args, config: ViewerConfig) -> int:
    """Execute one command; returns the process exit status."""
    use_color = args.colored or config.use_color
    formatter = ReportFormatter(use_color=use_color)

    if args.command == 'decode':
        text = sys.stdin.read() if args.text == '-' else args.text
        doc = Document(bytes_per_line=config.bytes_per_line)
        try:
            count = doc.import_text(text, args.encoding)
        except DecodeError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if args.output:
            path = SelectionExporter(config.export_dir).export_raw(doc.buffer, args.output)
            print(f"Wrote {count} bytes to {path}")
        else:
            print(HexDumper(width=doc.bytes_per_line, use_color=use_color).dump(doc.buffer))
        return 0

    bytes_per_line = getattr(args, 'width', None) or config.bytes_per_line
    doc = Document.from_file(args.file, bytes_per_line=bytes_per_line)

    if args.command == 'info':
        print(formatter.format_file_info(doc.file_info(), doc.name))
    elif args.command == 'dump':
        print(run_dump(args, config, doc, use_color))
    elif args.command == 'chunks':
        chunks = doc.parse_container()
        if chunks is None:
            print(f"{doc.name}: not a PNG-style container")
            return 1
        print(formatter.format_chunks(chunks))
    elif args.command == 'histogram':
        print(formatter.format_histogram(doc.histogram(), top=args.top))
    elif args.command in ('certs', 'xml'):
        print(formatter.format_detection(doc.detection()))
    elif args.command == 'export':
        doc.select(*args.select)
        exporter = SelectionExporter(config.export_dir)
        if args.hex:
            path = exporter.export_hex(doc.selected_bytes(), args.output)
        else:
            path = exporter.export_raw(doc.selected_bytes(), args.output)
        print(formatter.format_selection(doc.selection, doc.buffer))
        print(f"Exported to {path}")
    return 0


def main():
    parser = build_parser()

    if ARGCOMPLETE_AVAILABLE:
        argcomplete.autocomplete(parser)

    args = parser.parse_args()

    if args.create_config:
        if create_default_config(args.config):
            print(f"Created default config: {args.config}")
        else:
            print(f"Config already exists: {args.config}")
        return

    if not args.command:
        parser.print_help()
        return

    try:
        module_levels = LoggingManager.parse_module_levels(args.debug_modules or '')
    except ValueError as e:
        parser.error(str(e))
    setup_logging(args.log_level, module_levels, args.colored)

    try:
        config = ViewerConfig.from_json(args.config)
        status = run(args, config)
    except FileNotFoundError as e:
        print(f"Error: file not found: {e.filename}", file=sys.stderr)
        status = 1
    except (BinprobeError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        status = 1

    sys.exit(status)


if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\nInterrupted")
        sys.exit(0)
