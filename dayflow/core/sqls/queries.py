"""
Database query SQL statements
Contains all SELECT, INSERT, UPDATE, DELETE statements

Filtered list queries are assembled by the repositories from the
WHERE fragments below; every statement is scoped by user_id.
"""

PRAGMA_FOREIGN_KEYS_ON = "PRAGMA foreign_keys = ON"

# Tag membership over the JSON-encoded tags column
TAG_FILTER = "EXISTS (SELECT 1 FROM json_each({table}.tags) WHERE json_each.value = ?)"

# Tasks queries
INSERT_TASK = """
    INSERT INTO tasks (
        id, user_id, title, description, due_date, due_time, priority, status,
        tags, recurring, parent_id, position, completed_at, created_at, updated_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

SELECT_TASK_BY_ID = """
    SELECT * FROM tasks
    WHERE id = ? AND user_id = ?
"""

SELECT_SUBTASKS = """
    SELECT * FROM tasks
    WHERE parent_id = ? AND user_id = ?
    ORDER BY position ASC, created_at ASC
"""

SELECT_TASKS_WHERE = "SELECT * FROM tasks WHERE {where}"

COUNT_TASKS_WHERE = "SELECT COUNT(*) AS total FROM tasks WHERE {where}"

TASKS_ORDER = " ORDER BY position ASC, created_at DESC, rowid DESC LIMIT ? OFFSET ?"

SELECT_ALL_TASKS = """
    SELECT * FROM tasks
    WHERE user_id = ?
    ORDER BY created_at ASC, rowid ASC
"""

UPDATE_TASK = "UPDATE tasks SET {assignments} WHERE id = ? AND user_id = ?"

DELETE_SUBTASKS = """
    DELETE FROM tasks
    WHERE parent_id = ? AND user_id = ?
"""

DELETE_TASK = """
    DELETE FROM tasks
    WHERE id = ? AND user_id = ?
"""

# Ideas queries
INSERT_IDEA = """
    INSERT INTO ideas (id, user_id, title, content, color, tags, created_at, updated_at)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
"""

SELECT_IDEA_BY_ID = """
    SELECT * FROM ideas
    WHERE id = ? AND user_id = ?
"""

SELECT_IDEAS_WHERE = "SELECT * FROM ideas WHERE {where}"

COUNT_IDEAS_WHERE = "SELECT COUNT(*) AS total FROM ideas WHERE {where}"

IDEA_SEARCH_FILTER = "(title LIKE ? ESCAPE '\\' OR content LIKE ? ESCAPE '\\')"

SELECT_ALL_IDEAS = """
    SELECT * FROM ideas
    WHERE user_id = ?
    ORDER BY created_at ASC, rowid ASC
"""

UPDATE_IDEA = "UPDATE ideas SET {assignments} WHERE id = ? AND user_id = ?"

DELETE_IDEA = """
    DELETE FROM ideas
    WHERE id = ? AND user_id = ?
"""

# Links queries
INSERT_LINK = """
    INSERT INTO links (
        id, user_id, url, title, description, image, favicon, status, tags,
        created_at, updated_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

SELECT_LINK_BY_ID = """
    SELECT * FROM links
    WHERE id = ? AND user_id = ?
"""

SELECT_LINKS_WHERE = "SELECT * FROM links WHERE {where}"

COUNT_LINKS_WHERE = "SELECT COUNT(*) AS total FROM links WHERE {where}"

LINK_SEARCH_FILTER = (
    "(title LIKE ? ESCAPE '\\' OR description LIKE ? ESCAPE '\\' OR url LIKE ? ESCAPE '\\')"
)

SELECT_ALL_LINKS = """
    SELECT * FROM links
    WHERE user_id = ?
    ORDER BY created_at ASC, rowid ASC
"""

UPDATE_LINK = "UPDATE links SET {assignments} WHERE id = ? AND user_id = ?"

DELETE_LINK = """
    DELETE FROM links
    WHERE id = ? AND user_id = ?
"""

# Newest first, shared by ideas and links
NEWEST_FIRST = " ORDER BY created_at DESC, rowid DESC LIMIT ? OFFSET ?"

# Profiles queries
SELECT_PROFILE = """
    SELECT * FROM profiles
    WHERE id = ?
"""

INSERT_PROFILE = """
    INSERT INTO profiles (
        id, email, name, timezone, theme, ai_enabled, notifications_enabled,
        daily_briefing_time, created_at, updated_at
    )
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
"""

UPDATE_PROFILE = "UPDATE profiles SET {assignments} WHERE id = ?"
