"""Account status data access layer"""

from koyeb_keepalive.config.constants import ACCOUNT_STATUS_KEY
from koyeb_keepalive.core.timezone import iso_now
from koyeb_keepalive.repositories.base import BaseRepository


class AccountStatusRepository(BaseRepository):
    """Per-account status Repository"""

    async def get_all(self) -> dict[str, dict]:
        """Get the status map keyed by account id"""
        return await self._get_json(ACCOUNT_STATUS_KEY, dict) or {}

    async def merge(self, account_id: str, fields: dict) -> dict:
        """
        Shallow-merge fields into the account's record and stamp updatedAt

        Fields not supplied keep their previous values.
        """
        status_data = await self.get_all()

        existing = status_data.get(account_id)
        record = dict(existing) if isinstance(existing, dict) else {}
        record.update(fields)
        record["updatedAt"] = iso_now()
        status_data[account_id] = record

        await self._put_json(ACCOUNT_STATUS_KEY, status_data)
        return record
