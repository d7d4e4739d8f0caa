"""Entry point for 'python -m arbantv_setup' command."""

from arbantv_setup.cli import main

if __name__ == "__main__":
    main()
