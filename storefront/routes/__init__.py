from storefront.routes.auth import auth_bp
from storefront.routes.catalog import catalog_bp
from storefront.routes.cart import cart_bp
from storefront.routes.orders import order_bp
from storefront.routes.user import user_bp
from storefront.routes.payment import payment_bp
from storefront.routes.uploads import uploads_bp
from storefront.routes.admin import admin_bp


def register_blueprints(app):
    """Register all blueprints"""
    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(catalog_bp, url_prefix='/api')
    app.register_blueprint(cart_bp, url_prefix='/api/cart')
    app.register_blueprint(order_bp, url_prefix='/api/orders')
    app.register_blueprint(user_bp, url_prefix='/api/user')
    app.register_blueprint(payment_bp, url_prefix='/api/payment')
    app.register_blueprint(admin_bp, url_prefix='/api/admin')
    app.register_blueprint(uploads_bp, url_prefix='/uploads')
