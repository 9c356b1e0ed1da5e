"""Notes application table definitions.

Users own note types and notes. Note type titles and note contents are
encrypted at rest; note type titles are also hashed so a user cannot create
the same title twice.
"""

USERS = {
    "name": "USERS",
    "columns": [
        {"field": "user_id", "type": "INTEGER", "primary": True, "auto_increment": True},
        {"field": "user_code", "type": "TEXT"},
    ],
}

NOTE_TYPES = {
    "name": "NOTE_TYPES",
    "columns": [
        {"field": "note_type_id", "type": "INTEGER", "primary": True, "auto_increment": True},
        {"field": "user_id", "type": "INTEGER", "foreign": "USERS.user_id"},
        {
            "field": "note_type_title",
            "type": "TEXT",
            "encrypted": True,
            "hash_col": "note_type_title_hash",
        },
        {"field": "note_type_title_hash", "type": "TEXT"},
    ],
    "unique": ["user_id,note_type_title_hash"],
}

NOTES = {
    "name": "NOTES",
    "columns": [
        {"field": "note_id", "type": "INTEGER", "primary": True, "auto_increment": True},
        {"field": "user_id", "type": "INTEGER", "foreign": "USERS.user_id"},
        {"field": "note_type_id", "type": "INTEGER", "foreign": "NOTE_TYPES.note_type_id"},
        {"field": "content", "type": "TEXT", "encrypted": True},
        {"field": "created_at", "type": "DATETIME", "default": "CURRENT_TIMESTAMP"},
    ],
}

TABLES = [USERS, NOTE_TYPES, NOTES]
