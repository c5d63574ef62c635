import argparse
import sys

from sqlalchemy import inspect

import models  # noqa: F401
from database import engine, Base


def existing_tables():
    """Таблицы приложения, которые уже есть в БД"""
    present = set(inspect(engine).get_table_names())
    return [name for name in Base.metadata.tables if name in present]


def create_tables():
    """Создать таблицы users и tasks (с индексами и каскадом)"""
    Base.metadata.create_all(bind=engine)
    print(f"Таблицы созданы: {', '.join(Base.metadata.tables)}")


def drop_tables():
    """Удалить таблицы приложения"""
    Base.metadata.drop_all(bind=engine)
    print("Все таблицы успешно удалены")


def main(argv=None):
    parser = argparse.ArgumentParser(description='Управление базой данных')
    parser.add_argument('--create', action='store_true', help='Создать таблицы')
    parser.add_argument('--drop', action='store_true', help='Удалить все таблицы')
    parser.add_argument('--force', action='store_true', help='Не запрашивать подтверждение')

    args = parser.parse_args(argv)

    if args.drop:
        tables = existing_tables()
        if not tables:
            print("Нет таблиц для удаления")
        else:
            print(f"Найдено таблиц: {len(tables)}")
            for table in tables:
                print(f"  - {table}")

            if not args.force:
                confirm = input("\nВы уверены, что хотите удалить ВСЕ таблицы? (y/N): ")
                if confirm.lower() not in ['y', 'yes']:
                    print("Операция отменена")
                    return 1
            drop_tables()

    if args.create:
        create_tables()

    if not (args.drop or args.create):
        parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
