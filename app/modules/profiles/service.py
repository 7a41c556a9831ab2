from supabase import Client
from app.core.errors import RequestError
from app.modules.profiles.schemas import ProfileResponse
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get the caller's own profile"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error getting profile {user_id}: {e}")
            raise RequestError(str(e))

        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

        return ProfileResponse(**result.data[0])
