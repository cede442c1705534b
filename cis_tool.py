import argparse
import logging
import sys
from pathlib import Path

from tqdm import tqdm

from cis_disasm.disassembler import DEFAULT_ENCODING, DEFAULT_MAX_DEPTH, Disassembler, max_depth_limit
from cis_disasm.exceptions import ScriptFormatException
from cis_disasm.text import export_text

logger = logging.getLogger("cis_tool")

SUFFIXES = {"disasm": ".txt", "export": ".txt", "json": ".json"}


def args_parse(argv=None):
    parser = argparse.ArgumentParser(
        description="CIS script tool",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog=(
            "Examples:\n"
            "  cis_tool.py -d -i script.dat -c shift_jis -o script.txt\n"
            "  cis_tool.py -e -i script.dat -o script.txt\n"
            "  cis_tool.py -j -i scripts/ -o json/ --pattern *.dat"
        ),
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("-d", "--disasm", dest="mode", action="store_const", const="disasm", help="Write the disassembly listing.")
    mode.add_argument("-e", "--export", dest="mode", action="store_const", const="export", help="Write the text export.")
    mode.add_argument("-j", "--json", dest="mode", action="store_const", const="json", help="Write a JSON dump.")

    parser.add_argument("-i", "--input", dest="input", metavar="PATH", required=True, help="Script file, or a directory of scripts.")
    parser.add_argument("-o", "--output", dest="output", metavar="PATH", required=True, help="Output file, or a directory for directory input.")
    parser.add_argument("-c", "--codepage", dest="encoding", default=DEFAULT_ENCODING, help=f"Text encoding of strings (default: {DEFAULT_ENCODING}).")
    parser.add_argument("--pattern", default="*.dat", help="Glob used for directory input (default: *.dat).")
    parser.add_argument("--max-depth", dest="max_depth", type=int, default=DEFAULT_MAX_DEPTH, help=f"Maximum push bin nesting (default: {DEFAULT_MAX_DEPTH}).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging.")

    parsed = parser.parse_args(argv)

    try:
        "".encode(parsed.encoding)
    except LookupError:
        parser.error(f"Unknown encoding: {parsed.encoding}")

    if not 0 <= parsed.max_depth <= max_depth_limit():
        parser.error(f"--max-depth must be between 0 and {max_depth_limit()}")

    if not Path(parsed.input).exists():
        parser.error(f"Input not found: {parsed.input}")

    return parsed


def process_file(disassembler: Disassembler, mode: str, input_path: Path, output_path: Path) -> None:
    script = disassembler.disassemble_from_file(str(input_path))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        if mode == "disasm":
            Disassembler.print_script(script, f)
        elif mode == "export":
            count = export_text(script, f)
            logger.info("%s: %d lines exported", input_path.name, count)
        else:
            Disassembler.render_to_json(script, f)


def main(argv=None) -> int:
    args = args_parse(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    disassembler = Disassembler(encoding=args.encoding, max_depth=args.max_depth)
    input_path = Path(args.input)
    output_path = Path(args.output)

    if input_path.is_dir():
        files = [f for f in sorted(input_path.glob(args.pattern)) if f.is_file()]
        jobs = [(f, output_path / f.with_suffix(SUFFIXES[args.mode]).name) for f in files]
    else:
        jobs = [(input_path, output_path)]

    for src, dst in tqdm(jobs, desc="Processing", disable=len(jobs) < 2):
        try:
            process_file(disassembler, args.mode, src, dst)
        except ScriptFormatException as e:
            logger.error("%s: %s", src.name, e)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
