"""
Authentication Service

Issues and verifies the anonymous player tokens that tie a client to its
saved game.
"""

import datetime
import uuid
from typing import Any, Dict, Optional

import jwt


class AuthService:
    """
    Token service for anonymous players.

    A player is nothing more than a random id signed into a JWT; the id
    selects the player's save slot in the store.
    """
    
    def __init__(self, jwt_secret: str, expiration_days: int = 365):
        """
        Args:
            jwt_secret: Secret key for JWT token generation
            expiration_days: Token lifetime
        """
        self.jwt_secret = jwt_secret
        self.expiration_days = expiration_days
    
    def issue_player_token(self, player_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a player id (unless given) and a signed token for it.
        
        Returns:
            Dictionary with success status, token and player info
        """
        player_id = player_id or str(uuid.uuid4())
        token_payload = {
            "player_id": player_id,
            "exp": datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=self.expiration_days)
        }
        
        token = jwt.encode(token_payload, self.jwt_secret, algorithm="HS256")
        
        return {
            "success": True,
            "token": token,
            "player": {"id": player_id}
        }
    
    def verify_token(self, token: str) -> Dict[str, Any]:
        """
        Verify and decode a player token.
        
        Args:
            token: JWT token string
            
        Returns:
            Dictionary with success status and player data or error
        """
        if not token:
            return {"success": False, "error": "Token is required"}
        
        try:
            payload = jwt.decode(token, self.jwt_secret, algorithms=["HS256"])
        except jwt.ExpiredSignatureError:
            return {"success": False, "error": "Token has expired"}
        except jwt.InvalidTokenError:
            return {"success": False, "error": "Invalid token"}
        
        player_id = payload.get("player_id")
        if not player_id:
            return {"success": False, "error": "Invalid token payload"}
        
        return {
            "success": True,
            "player": {"id": player_id}
        }


# Global service instance
_auth_service = None


def get_auth_service() -> Optional[AuthService]:
    """Get the global authentication service instance."""
    return _auth_service


def initialize_auth_service(jwt_secret: str, expiration_days: int = 365) -> AuthService:
    """Initialize the global authentication service instance."""
    global _auth_service
    _auth_service = AuthService(jwt_secret, expiration_days)
    return _auth_service
