import os
from dotenv import load_dotenv

# Load environment variables before the config class reads them
load_dotenv()

from storefront import create_app, db  # noqa: E402
from storefront.services.auth_service import AuthService  # noqa: E402

# Create app instance
app = create_app()


@app.cli.command()
def init_db():
    """Initialize database"""
    db.create_all()
    print('Database initialized successfully!')


@app.cli.command()
def drop_db():
    """Drop all tables"""
    if input('Are you sure you want to drop all tables? (yes/no): ') == 'yes':
        db.drop_all()
        print('Database dropped successfully!')
    else:
        print('Operation cancelled')


@app.cli.command()
def create_admin():
    """Create admin user, or reset the password of an existing one"""
    email = os.getenv('ADMIN_EMAIL') or input('Admin email: ')
    password = os.getenv('ADMIN_PASSWORD') or input('Admin password: ')

    if len(password) < 6:
        print('Password must be at least 6 characters')
        return

    admin = AuthService.ensure_admin(email, password)
    print(f'Admin user ready: {admin.email}')


if __name__ == '__main__':
    app.run(
        host=os.getenv('HOST', '0.0.0.0'),
        port=int(os.getenv('PORT', 5000)),
        debug=os.getenv('DEBUG', 'True') == 'True'
    )
