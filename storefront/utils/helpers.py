import random
import time
from slugify import slugify as python_slugify


def generate_order_number() -> str:
    """Generate order number, e.g. HH-1718000000000-042"""
    millis = int(time.time() * 1000)
    return f"HH-{millis}-{random.randint(0, 999):03d}"


def slugify(text: str) -> str:
    """Generate URL-friendly slug"""
    return python_slugify(text)


def unique_slug(model, text: str, exclude_id: str = None) -> str:
    """Slug for `text` that no other row of `model` uses, suffixed -1, -2, ... on collision"""
    base_slug = slugify(text)
    slug = base_slug
    counter = 1
    while True:
        query = model.query.filter_by(slug=slug)
        if exclude_id:
            query = query.filter(model.id != exclude_id)
        if not query.first():
            return slug
        slug = f"{base_slug}-{counter}"
        counter += 1


def allowed_file(filename: str, allowed_extensions: set) -> bool:
    """Check if file extension is allowed"""
    return '.' in filename and \
           filename.rsplit('.', 1)[1].lower() in allowed_extensions


def to_amount_in_paisa(amount) -> int:
    return int((amount * 100).to_integral_value())
