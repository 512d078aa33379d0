#!/usr/bin/env python3
"""
Database initialization script
Creates the tables and loads the sample catalog
"""

import sys
import os

# Add parent directory to path to import storefront
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from storefront import create_app, db
from storefront.seed import SAMPLE_CATEGORIES, SAMPLE_PRODUCTS, seed_database


def init_db():
    app = create_app()

    with app.app_context():
        print("Creating database tables...")
        db.create_all()

        if not seed_database():
            print("Database already initialized.")
            return

        print(f"Successfully created {len(SAMPLE_CATEGORIES)} categories and {len(SAMPLE_PRODUCTS)} products")


if __name__ == '__main__':
    init_db()
