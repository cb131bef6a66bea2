# app/db/base.py
# Общая declarative база для SQLAlchemy.
# Модуль не импортирует модели (иначе циклические импорты), модели импортируют Base отсюда.

from sqlalchemy.orm import declarative_base

Base = declarative_base()
