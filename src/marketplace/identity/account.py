"""Account maintenance: update and delete a user."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from marketplace.domain import marketplace
from marketplace.errors import BadRequestError, NotFoundError
from marketplace.identity.lookup import find_account_by_email, find_user
from marketplace.identity.user import User


@marketplace.command(part_of="User")
class UpdateUser:
    user_id: Identifier(required=True)
    name: String(max_length=20)
    email: String(max_length=254)
    password_hash: String(max_length=128)


@marketplace.command(part_of="User")
class DeleteUser:
    user_id: Identifier(required=True)


def _load(user_id) -> User:
    user = find_user(user_id)
    if user is None:
        raise NotFoundError(f"No user with ID {user_id}.")
    return user


@marketplace.command_handler(part_of=User)
class ManageUserHandler:
    @handle(UpdateUser)
    def update_user(self, command):
        user = _load(command.user_id)

        changes = {}
        if command.name is not None:
            changes["name"] = command.name
        if command.email is not None and command.email.strip().lower() != user.email:
            if find_account_by_email(command.email) is not None:
                raise BadRequestError("An account with this email already exists.")
            changes["email"] = command.email
        if command.password_hash is not None:
            changes["password_hash"] = command.password_hash

        user.update_details(**changes)
        current_domain.repository_for(User).add(user)
        return str(user.id)

    @handle(DeleteUser)
    def delete_user(self, command):
        user = _load(command.user_id)
        current_domain.repository_for(User)._dao.delete(user)
