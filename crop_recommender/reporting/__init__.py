"""Plain-text formatting of recommendation results and catalog checks for the CLI."""
