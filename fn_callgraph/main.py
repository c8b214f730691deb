"""
호출 그래프 생성기의 메인 진입점입니다.
커맨드 라인 인자를 처리하고 그래프 텍스트를 stdout(또는 파일)에 씁니다.
"""
import argparse
import sys

from shared_config.logger import configure_console_logging, setup_file_logging, verbosity_to_level

from .config import CallGraphConfig
from .core import CallGraphGenerator
from .exceptions import CallGraphError
from .patterns import (
    DEFAULT_START_PATTERN,
    DEFAULT_END_PATTERN,
    DEFAULT_IGNORE_PATTERN,
)


def build_parser():
    parser = argparse.ArgumentParser(
        prog='fn-callgraph',
        description='Heuristic call graph generator (Graphviz DOT output)'
    )
    parser.add_argument('files', nargs='*', help='Source files to analyze')

    parser.add_argument('--start', default=None,
                        help=f'Regex for a function start line (default: {DEFAULT_START_PATTERN!r})')
    parser.add_argument('--end', default=None,
                        help=f'Regex for a function end line (default: {DEFAULT_END_PATTERN!r})')
    parser.add_argument('--name-cleanup', dest='name_cleanup', default=None,
                        help='Regex stripped repeatedly from a start line to get the function name')
    parser.add_argument('--ignore', default=None,
                        help=f'Regex for function names to leave out (default: {DEFAULT_IGNORE_PATTERN!r})')
    parser.add_argument('--name-strategy', dest='name_strategy', choices=['regex', 'paren'], default=None,
                        help='How to derive the function name from a start line (default: regex)')
    parser.add_argument('--flush-unterminated', dest='flush_unterminated', action='store_true', default=None,
                        help='Keep a function still open at end of file instead of dropping it')
    parser.add_argument('--loc-from-functions', dest='loc_from_functions', action='store_true', default=None,
                        help='Legend line count sums function bodies instead of whole files')
    parser.add_argument('--config', default=None,
                        help='YAML file with any of the options above (command line wins)')

    parser.add_argument('--format', dest='output_format', choices=CallGraphGenerator.OUTPUT_FORMATS,
                        default='dot', help='Output format (default: dot)')
    parser.add_argument('-o', '--output', default=None, help='Output file (default: stdout)')
    parser.add_argument('-v', '--verbose', action='count', default=0,
                        help='Diagnostics on stderr (-v: info, -vv: debug)')
    parser.add_argument('--log-dir', dest='log_dir', default=None, help='Also write a log file here')
    return parser


def load_config(args) -> CallGraphConfig:
    """YAML 설정 파일(선택)과 명령행 옵션을 합칩니다."""
    config = CallGraphConfig.from_yaml(args.config) if args.config else CallGraphConfig()
    return config.merged({
        "start": args.start,
        "end": args.end,
        "name_cleanup": args.name_cleanup,
        "ignore": args.ignore,
        "name_strategy": args.name_strategy,
        "flush_unterminated": args.flush_unterminated,
        "loc_from_functions": args.loc_from_functions,
    })


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_console_logging(verbosity_to_level(args.verbose))
    if args.log_dir:
        setup_file_logging(args.log_dir)

    try:
        generator = CallGraphGenerator(load_config(args))
        output = generator.generate(args.files, args.output_format)
    except CallGraphError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        try:
            with open(args.output, 'w', encoding='utf-8') as f:
                f.write(output)
        except OSError as e:
            print(f"Error: 출력 파일을 쓸 수 없습니다: {args.output} ({e})", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
