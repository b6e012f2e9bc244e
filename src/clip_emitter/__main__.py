"""Allow ``python -m clip_emitter``."""

from clip_emitter.presentation.cli.app import app

if __name__ == "__main__":
    app()
