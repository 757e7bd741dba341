"""Dev CLI for query-tries. Usage: python -m query_tries <engine> <template> [phrase]"""

from __future__ import annotations

import json
import sys


def main() -> None:
    if len(sys.argv) < 3:
        print(
            "Usage: python -m query_tries <engine> <template> [phrase]",
            file=sys.stderr,
        )
        sys.exit(1)

    engine, template = sys.argv[1], sys.argv[2]
    phrase = " ".join(sys.argv[3:]) or None

    from query_tries import compile_args

    try:
        args = compile_args(template, engine, phrase=phrase)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(args, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
