"""
Database schema definitions
Contains all CREATE TABLE and CREATE INDEX statements
"""

# Table creation statements
CREATE_TASKS_TABLE = """
    CREATE TABLE IF NOT EXISTS tasks (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        description TEXT,
        due_date TEXT,
        due_time TEXT,
        priority TEXT NOT NULL DEFAULT 'medium',
        status TEXT NOT NULL DEFAULT 'todo',
        tags TEXT NOT NULL DEFAULT '[]',
        recurring TEXT,
        parent_id TEXT REFERENCES tasks(id) ON DELETE CASCADE,
        position INTEGER NOT NULL DEFAULT 0,
        completed_at TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
"""

CREATE_IDEAS_TABLE = """
    CREATE TABLE IF NOT EXISTS ideas (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        title TEXT NOT NULL,
        content TEXT NOT NULL DEFAULT '',
        color TEXT NOT NULL DEFAULT 'default',
        tags TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
"""

CREATE_LINKS_TABLE = """
    CREATE TABLE IF NOT EXISTS links (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        url TEXT NOT NULL,
        title TEXT,
        description TEXT,
        image TEXT,
        favicon TEXT,
        status TEXT NOT NULL DEFAULT 'unread',
        tags TEXT NOT NULL DEFAULT '[]',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
"""

CREATE_PROFILES_TABLE = """
    CREATE TABLE IF NOT EXISTS profiles (
        id TEXT PRIMARY KEY,
        email TEXT,
        name TEXT,
        timezone TEXT NOT NULL DEFAULT 'Europe/Berlin',
        theme TEXT NOT NULL DEFAULT 'system',
        ai_enabled BOOLEAN NOT NULL DEFAULT 0,
        notifications_enabled BOOLEAN NOT NULL DEFAULT 1,
        daily_briefing_time TEXT NOT NULL DEFAULT '08:00',
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
"""

# Index creation statements
CREATE_TASKS_USER_DUE_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_tasks_user_due
    ON tasks(user_id, due_date)
"""

CREATE_TASKS_PARENT_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_tasks_parent
    ON tasks(parent_id)
"""

CREATE_IDEAS_USER_CREATED_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_ideas_user_created
    ON ideas(user_id, created_at DESC)
"""

CREATE_LINKS_USER_CREATED_INDEX = """
    CREATE INDEX IF NOT EXISTS idx_links_user_created
    ON links(user_id, created_at DESC)
"""

# All table creation statements in order
ALL_TABLES = [
    CREATE_TASKS_TABLE,
    CREATE_IDEAS_TABLE,
    CREATE_LINKS_TABLE,
    CREATE_PROFILES_TABLE,
]

# All index creation statements
ALL_INDEXES = [
    CREATE_TASKS_USER_DUE_INDEX,
    CREATE_TASKS_PARENT_INDEX,
    CREATE_IDEAS_USER_CREATED_INDEX,
    CREATE_LINKS_USER_CREATED_INDEX,
]
