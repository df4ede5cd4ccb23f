import aiosqlite


class DraftRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def get_payload(self, owner: str) -> str | None:
        cursor = await self._db.execute("SELECT payload FROM drafts WHERE owner = ?", (owner,))
        row = await cursor.fetchone()
        if row is None:
            return None
        return row["payload"]

    async def upsert(self, owner: str, payload: str, updated_at: str) -> None:
        await self._db.execute(
            """
            INSERT INTO drafts (owner, payload, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(owner) DO UPDATE SET
                payload = excluded.payload,
                updated_at = excluded.updated_at
            """,
            (owner, payload, updated_at),
        )
        await self._db.commit()

    async def delete(self, owner: str) -> None:
        await self._db.execute("DELETE FROM drafts WHERE owner = ?", (owner,))
        await self._db.commit()
