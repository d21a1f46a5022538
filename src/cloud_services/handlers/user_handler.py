"""HTTP handlers for user operations.

Handlers convert between DTOs (API contracts) and service calls.
Service errors are left to propagate; the API layer maps their kind to
a status code.
"""

from cloud_services.dto import CreateUserRequest, UserItem, UserListResponse, UserResponse
from cloud_services.services import UserService


class UserHandler:
    """HTTP handlers for the users service.

    Example:
        ```python
        handler = UserHandler(user_service=service, instance_id="users-1")

        @app.get("/users", response_model=UserListResponse)
        async def list_users():
            return await handler.list_users()
        ```
    """

    def __init__(self, user_service: UserService, instance_id: str = "unknown") -> None:
        """Initialize the user handler.

        Args:
            user_service: The user service for business logic (required).
            instance_id: Echoed in listing responses.
        """
        self._users = user_service
        self._instance_id = instance_id

    async def list_users(self) -> UserListResponse:
        """Handle GET /users requests."""
        listing = await self._users.list_users()
        return UserListResponse(
            count=listing.count,
            data=[UserItem.model_validate(item) for item in listing.items],
            cached=listing.cached,
            instance=self._instance_id,
        )

    async def get_user(self, user_id: int) -> UserResponse:
        """Handle GET /users/{id} requests."""
        user = await self._users.get_user(user_id)
        return UserResponse(data=UserItem.from_entity(user))

    async def create_user(self, request: CreateUserRequest) -> UserResponse:
        """Handle POST /users requests."""
        user = await self._users.create_user(name=request.name, email=request.email)
        return UserResponse(message="User created successfully", data=UserItem.from_entity(user))

    async def delete_user(self, user_id: int) -> UserResponse:
        """Handle DELETE /users/{id} requests."""
        user = await self._users.delete_user(user_id)
        return UserResponse(message="User deleted successfully", data=UserItem.from_entity(user))
