from typing import List, Optional

from sqlalchemy import (
    DECIMAL,
    Date,
    DateTime,
    Enum,
    ForeignKeyConstraint,
    Index,
    Integer,
    String,
    Text,
    text,
)
from sqlalchemy.orm import Mapped, declarative_base, mapped_column, relationship

from .roles import Role
from .constants import (
    MENU_CATEGORIES,
    AccountStatus,
    NotificationStatus,
    NotificationType,
    OrderStatus,
    PaymentStatus,
    ReservationStatus,
    values,
)

Base = declarative_base()
metadata = Base.metadata


class User(Base):
    __tablename__ = "users"
    __table_args__ = (Index("uq_users_email", "email", unique=True),)

    id = mapped_column(Integer, primary_key=True)
    email = mapped_column(String(255), nullable=False)
    name = mapped_column(String(120), nullable=False)
    password_hash = mapped_column(String(72), nullable=False)
    role = mapped_column(
        Enum(*values(Role), name="user_role"),
        nullable=False,
        server_default=text("'customer'"),
    )
    # Only cashiers go through approval; other roles leave this NULL
    status = mapped_column(Enum(*values(AccountStatus), name="account_status"))
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
    )
    orders: Mapped[List["Order"]] = relationship(
        "Order", uselist=True, back_populates="user", cascade="all, delete-orphan"
    )
    notifications: Mapped[List["Notification"]] = relationship(
        "Notification",
        uselist=True,
        back_populates="user",
        cascade="all, delete-orphan",
    )


class MenuItem(Base):
    __tablename__ = "menu_item"
    __table_args__ = (Index("menu_item_category", "category"),)

    id = mapped_column(Integer, primary_key=True)
    name = mapped_column(String(100), nullable=False)
    description = mapped_column(Text)
    price = mapped_column(DECIMAL(10, 2), nullable=False, server_default=text("'0.00'"))
    image = mapped_column(String(500))
    category = mapped_column(Enum(*MENU_CATEGORIES, name="menu_category"), nullable=False)
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )


class DiningTable(Base):
    __tablename__ = "dining_table"

    id = mapped_column(Integer, primary_key=True, autoincrement=False)
    name = mapped_column(String(50), nullable=False)
    capacity = mapped_column(Integer, nullable=False)

    reservations: Mapped[List["Reservation"]] = relationship(
        "Reservation", uselist=True, back_populates="table"
    )


class Reservation(Base):
    __tablename__ = "reservation"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="fk_res_user"
        ),
        ForeignKeyConstraint(["table_id"], ["dining_table.id"], name="fk_res_table"),
        Index("reservation_slot", "reservation_date", "reservation_time"),
        Index("reservation_user", "user_id", "reservation_date"),
        # One live booking per table and slot; cancelled rows release the key
        Index("uq_reservation_slot_key", "slot_key", unique=True),
    )

    id = mapped_column(Integer, primary_key=True)
    user_id = mapped_column(Integer, nullable=False)
    name = mapped_column(String(120), nullable=False)
    email = mapped_column(String(255), nullable=False)
    phone = mapped_column(String(30), nullable=False)
    reservation_date = mapped_column(Date, nullable=False)
    reservation_time = mapped_column(String(8), nullable=False)
    guests = mapped_column(Integer, nullable=False)
    table_id = mapped_column(Integer, nullable=False)
    special_requests = mapped_column(Text)
    status = mapped_column(
        Enum(*values(ReservationStatus), name="reservation_status"),
        nullable=False,
        server_default=text("'pending'"),
    )
    slot_key = mapped_column(String(64))
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    user: Mapped["User"] = relationship("User", back_populates="reservations")
    table: Mapped["DiningTable"] = relationship(
        "DiningTable", back_populates="reservations"
    )
    payment: Mapped[Optional["Payment"]] = relationship(
        "Payment",
        uselist=False,
        back_populates="reservation",
        cascade="all, delete-orphan",
    )

    @staticmethod
    def make_slot_key(table_id, reservation_date, reservation_time):
        return f"{table_id}@{reservation_date.isoformat()} {reservation_time}"

    def hold_slot(self):
        self.slot_key = self.make_slot_key(
            self.table_id, self.reservation_date, self.reservation_time
        )

    def release_slot(self):
        self.slot_key = None


class Payment(Base):
    __tablename__ = "payment"
    __table_args__ = (
        ForeignKeyConstraint(
            ["reservation_id"],
            ["reservation.id"],
            ondelete="CASCADE",
            name="fk_pay_reservation",
        ),
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="fk_pay_user"
        ),
        Index("uq_payment_reservation", "reservation_id", unique=True),
    )

    id = mapped_column(Integer, primary_key=True)
    reservation_id = mapped_column(Integer, nullable=False)
    user_id = mapped_column(Integer, nullable=False)
    amount = mapped_column(DECIMAL(10, 2), nullable=False)
    status = mapped_column(
        Enum(*values(PaymentStatus), name="payment_status"),
        nullable=False,
        server_default=text("'pending'"),
    )
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )
    updated_at = mapped_column(DateTime)

    reservation: Mapped["Reservation"] = relationship(
        "Reservation", back_populates="payment"
    )


class Order(Base):
    __tablename__ = "_order"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="fk_ord_user"
        ),
        Index("order_user", "user_id", "created_at"),
    )

    id = mapped_column(Integer, primary_key=True)
    user_id = mapped_column(Integer, nullable=False)
    total = mapped_column(DECIMAL(10, 2), nullable=False)
    status = mapped_column(
        Enum(*values(OrderStatus), name="order_status"),
        nullable=False,
        server_default=text("'pending'"),
    )
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    user: Mapped["User"] = relationship("User", back_populates="orders")
    items: Mapped[List["OrderItem"]] = relationship(
        "OrderItem",
        uselist=True,
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
    )


class OrderItem(Base):
    __tablename__ = "order_item"
    __table_args__ = (
        ForeignKeyConstraint(
            ["order_id"], ["_order.id"], ondelete="CASCADE", name="fk_oi_ord"
        ),
        Index("order_id", "order_id"),
    )

    id = mapped_column(Integer, primary_key=True)
    order_id = mapped_column(Integer, nullable=False)
    position = mapped_column(Integer, nullable=False, server_default=text("'0'"))
    # Snapshot of the menu item at submission; the catalog row may change later
    menu_item_id = mapped_column(Integer, nullable=False)
    name = mapped_column(String(100), nullable=False)
    price = mapped_column(DECIMAL(10, 2), nullable=False)
    quantity = mapped_column(Integer, nullable=False, server_default=text("'1'"))

    order: Mapped["Order"] = relationship("Order", back_populates="items")


class Notification(Base):
    __tablename__ = "notification"
    __table_args__ = (
        ForeignKeyConstraint(
            ["user_id"], ["users.id"], ondelete="CASCADE", name="fk_nf_user"
        ),
        Index("notification_user", "user_id", "created_at"),
    )

    id = mapped_column(Integer, primary_key=True)
    user_id = mapped_column(Integer, nullable=False)
    title = mapped_column(String(160), nullable=False)
    message = mapped_column(Text, nullable=False)
    type = mapped_column(
        Enum(*values(NotificationType), name="notification_type"),
        nullable=False,
        server_default=text("'system'"),
    )
    status = mapped_column(
        Enum(*values(NotificationStatus), name="notification_status"),
        nullable=False,
        server_default=text("'unread'"),
    )
    created_at = mapped_column(
        DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP")
    )

    user: Mapped["User"] = relationship("User", back_populates="notifications")
