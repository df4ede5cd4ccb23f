import aiosqlite


class SessionRepository:
    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def create(self, session: dict) -> None:
        await self._db.execute(
            """
            INSERT INTO sessions (session_id, email, name, api_token, created_at, updated_at)
            VALUES (:session_id, :email, :name, :api_token, :created_at, :updated_at)
            """,
            session,
        )
        await self._db.commit()

    async def get_by_id(self, session_id: str) -> dict | None:
        cursor = await self._db.execute(
            """
            SELECT session_id, email, name, api_token, created_at, updated_at
            FROM sessions
            WHERE session_id = ?
            """,
            (session_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        return dict(row)

    async def update_identity(self, session_id: str, email: str, name: str, updated_at: str) -> None:
        await self._db.execute(
            "UPDATE sessions SET email = ?, name = ?, updated_at = ? WHERE session_id = ?",
            (email, name, updated_at, session_id),
        )
        await self._db.commit()

    async def delete(self, session_id: str) -> None:
        await self._db.execute("DELETE FROM sessions WHERE session_id = ?", (session_id,))
        await self._db.commit()
