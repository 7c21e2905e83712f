"""Main entry point for the keysift package."""
from keysift.cli import cli


def main():
    """Main entry point function."""
    cli()


if __name__ == "__main__":
    main()
