"""
Starting data: the 50-table floor plan, the staff/demo accounts and the menu.

Each seeder is idempotent, so ``seed_all`` can run against a database that is
already partly populated.
"""

from decimal import Decimal

from sqlalchemy import func, select

from .constants import AccountStatus
from .models import DiningTable, MenuItem, User
from .roles import Role
from .services.user_service import hash_password

# (first id, last id, capacity)
TABLE_LAYOUT = (
    (1, 15, 2),
    (16, 35, 4),
    (36, 45, 6),
    (46, 50, 8),
)

DEFAULT_USERS = (
    ("super_admin@rcoffee.com", "Super Admin", "admin123", Role.SUPER_ADMIN, None),
    ("admin@rcoffee.com", "Admin User", "admin123", Role.ADMIN, None),
    ("cashier@rcoffee.com", "Cashier User", "cashier123", Role.CASHIER, AccountStatus.APPROVED.value),
    ("customer@example.com", "Customer User", "customer123", Role.CUSTOMER, None),
)

_IMG = "https://images.unsplash.com/photo-{}?q=80&w=2070&auto=format&fit=crop"

MENU = (
    ("Espresso", "Concentrated coffee served in a small, strong shot.", "3.50", "1510591509098-f4fdc6d0ff04", "coffee"),
    ("Cappuccino", "Equal parts espresso, steamed milk, and milk foam.", "4.50", "1534778101976-62847782c213", "coffee"),
    ("Latte", "Espresso with steamed milk and a light layer of foam.", "4.75", "1570968915860-54d5c301fa9f", "coffee"),
    ("Americano", "Espresso diluted with hot water to a similar strength to coffee.", "3.75", "1551030173-122aabc4489c", "coffee"),
    ("Mocha", "Espresso with steamed milk, chocolate, and whipped cream.", "5.25", "1578632292335-df3abbb0d586", "coffee"),
    ("Green Tea", "Fresh brewed loose leaf green tea.", "3.75", "1627435601361-ec25f5b1d0e5", "tea"),
    ("Earl Grey", "Black tea infused with bergamot oil.", "3.75", "1594631252845-29fc4cc8cde9", "tea"),
    ("Croissant", "Buttery, flaky, viennoiserie pastry.", "3.50", "1555507036-ab1f4038808a", "pastry"),
    ("Blueberry Muffin", "Moist muffin filled with fresh blueberries.", "3.75", "1585477291617-97ac6c117d24", "pastry"),
    ("Avocado Toast", "Sourdough toast topped with avocado, cherry tomatoes, and feta.", "8.50", "1603046891748-a640fd857a3b", "breakfast"),
    ("Breakfast Sandwich", "Egg, bacon, and cheese on a toasted brioche bun.", "7.50", "1619096252214-ef06c45683e3", "breakfast"),
    ("Chicken Salad", "Mixed greens, grilled chicken, avocado, and balsamic vinaigrette.", "12.50", "1512621776951-a57141f2eefd", "lunch"),
    ("Veggie Wrap", "Hummus, mixed vegetables, and feta wrapped in a spinach tortilla.", "9.50", "1626700051175-6818013e1d4f", "lunch"),
    ("Chocolate Cake", "Rich, moist chocolate cake with ganache frosting.", "6.50", "1579306194872-64d3b7bac4c2", "dessert"),
    ("Tiramisu", "Coffee-soaked ladyfingers layered with mascarpone cream.", "7.00", "1571877227200-a0d98ea607e9", "dessert"),
)


def seed_tables(session):
    if session.scalar(select(func.count(DiningTable.id))):
        return 0
    count = 0
    for first, last, capacity in TABLE_LAYOUT:
        for table_id in range(first, last + 1):
            session.add(DiningTable(id=table_id, name=f"Table {table_id}", capacity=capacity))
            count += 1
    session.commit()
    return count


def seed_users(session):
    count = 0
    for email, name, password, role, status in DEFAULT_USERS:
        if session.scalar(select(User).where(User.email == email)) is not None:
            continue
        session.add(
            User(
                email=email,
                name=name,
                password_hash=hash_password(password),
                role=role.value,
                status=status,
            )
        )
        count += 1
    session.commit()
    return count


def seed_menu(session):
    if session.scalar(select(func.count(MenuItem.id))):
        return 0
    for name, description, price, photo, category in MENU:
        session.add(
            MenuItem(
                name=name,
                description=description,
                price=Decimal(price),
                image=_IMG.format(photo),
                category=category,
            )
        )
    session.commit()
    return len(MENU)


def seed_all(session):
    tables = seed_tables(session)
    users = seed_users(session)
    items = seed_menu(session)
    print(f"[SEED] tables: {tables}, users: {users}, menu items: {items}")
