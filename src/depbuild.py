"""cargo build-deps - build a Cargo project's dependencies on their own.

    Returns:
        int: Exit code
"""
from args import parse_args
from cli_build import run_build


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    run_build(args)


if __name__ == "__main__":
    main()
