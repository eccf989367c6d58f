"""scriptbay: run local shell scripts grouped by category, with paired undo scripts."""
