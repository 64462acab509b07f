"""User registration and removal: commands and handler."""

from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.user.user import User


@storefront.command(part_of="User")
class RegisterUser:
    email: String(required=True, max_length=254)
    name: String(required=True, max_length=100)


@storefront.command(part_of="User")
class RemoveUser:
    user_id: Identifier(required=True)


@storefront.command_handler(part_of=User)
class UserAccountHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        user = User.register(email=command.email, name=command.name)
        current_domain.repository_for(User).add(user)
        return str(user.id)

    @handle(RemoveUser)
    def remove_user(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.mark_removed()
        # Registers the removal event with the unit of work before the row goes
        repo.add(user)
        repo._dao.delete(user)
