from databases import Database


CREATE_STORAGE_TABLE = """
CREATE TABLE IF NOT EXISTS LocalStorage (key VARCHAR(256) PRIMARY KEY, value TEXT)
"""


GET_ITEM = "SELECT value FROM LocalStorage WHERE key = :key"


SET_ITEM = """
INSERT INTO LocalStorage(key, value) VALUES (:key, :value)
ON CONFLICT(key) DO UPDATE SET value = excluded.value
"""


REMOVE_ITEM = "DELETE FROM LocalStorage WHERE key = :key"


async def create_db(db: Database) -> None:
    await db.execute(  # pyright: ignore[reportUnknownMemberType]
        query=CREATE_STORAGE_TABLE
    )


class LocalStorage:
    """String key-value storage, one row per key."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def get_item(self, key: str) -> str | None:
        result = await self.db.fetch_one(  # pyright: ignore[reportUnknownMemberType]
            GET_ITEM, values={"key": key}
        )
        if result is None:
            return None
        return result["value"]

    async def set_item(self, key: str, value: str) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            SET_ITEM, values={"key": key, "value": value}
        )

    async def remove_item(self, key: str) -> None:
        await self.db.execute(  # pyright: ignore[reportUnknownMemberType]
            REMOVE_ITEM, values={"key": key}
        )
