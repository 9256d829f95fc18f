from pathlib import Path

from recipe_server.config import get_settings
from recipe_server.db import init_db, make_engine
from recipe_server.log import configure_logging
from recipe_server.seed import import_recipes, load_recipes
from recipe_server.store import RecordStore


def main():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL, "console")
    db_engine = make_engine(settings)
    init_db(db_engine)
    p = Path(__file__).resolve().parents[1] / 'data' / 'recipes.json'
    if not p.exists():
        print('data/recipes.json not found')
        return
    added = import_recipes(RecordStore(db_engine), load_recipes(p))
    db_engine.dispose()
    print(f'Imported {added} recipes')


if __name__ == '__main__':
    main()
