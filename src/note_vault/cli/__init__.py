"""NoteVault command-line interface."""
