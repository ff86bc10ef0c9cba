from cafe.extensions import db
from cafe.models import Base
from cafe.seed import seed_all
from main import create_app

app = create_app()

with app.app_context():
    Base.metadata.create_all(db.engine)
    seed_all(db.session)

print("Seed data loaded successfully!")
