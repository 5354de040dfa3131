"""
Core dependencies for route protection
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from taskflow.core.exceptions import AuthError
from taskflow.database.supabase_client import get_supabase
from taskflow.modules.users.service import UserService
from supabase import Client
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is reported as 401 through AuthError
security = HTTPBearer(auto_error=False)


def get_user_service(supabase: Client = Depends(get_supabase)) -> UserService:
    return UserService(supabase)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security),
    user_service: UserService = Depends(get_user_service)
) -> Dict[str, Any]:
    """Resolve the bearer token to the stored user row"""
    if credentials is None or not credentials.credentials:
        raise AuthError("Missing bearer token")
    user = user_service.get_user_by_token(credentials.credentials)
    if user is None:
        raise AuthError("Invalid token")
    return user
