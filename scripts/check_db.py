# scripts/check_db.py
# Проверяет подключение к DATABASE_URL и печатает число строк в таблицах корзины
from sqlalchemy import inspect, select, func

from app.core.config import settings
from app.db.session import engine
from app.models.cart import CartItem
from app.models.product import Product
from app.models.user import User

def main():
    print('Trying to connect to:', settings.DATABASE_URL)
    try:
        with engine.connect() as conn:
            existing = set(inspect(conn).get_table_names())
            for model in (User, Product, CartItem):
                table = model.__tablename__
                if table not in existing:
                    print(f'{table}: missing (run alembic upgrade head or start the API)')
                    continue
                count = conn.execute(select(func.count()).select_from(model)).scalar()
                print(f'{table}: {count} rows')
    except Exception as e:
        print('Connection failed:', e)
        return 1
    return 0

if __name__ == '__main__':
    raise SystemExit(main())
