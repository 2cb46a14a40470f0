from storefront.extensions import db
from storefront.models.user import User


class UserService:
    @staticmethod
    def get_address(user: User) -> dict:
        data = user.address_dict()
        data["has_address"] = user.has_any_address()
        return data

    @staticmethod
    def update_address(user: User, name: str, phone_number: str, region: str, city: str, street: str) -> dict:
        user.name = name
        user.phone_number = phone_number
        user.region = region
        user.city = city
        user.street = street
        db.session.commit()
        return user.address_dict()
