"""
reset_data.py
-------------
Utility script to clear all stored data (users, vehicles, bookings) from the store file.

This script is designed for development and testing purposes.
It opens the store configured for the app (``RENTAL_STORE_PATH`` or the
default data.pkl), removes every record and saves it back to disk.

Usage:
    $ python reset_data.py

After running this script, you can repopulate sample data by executing:
    $ python seeds.py
"""

from rental_booking import create_app


def main():
    """Clear all data (users, vehicles, bookings) from the persistent store."""
    app = create_app()
    store = app.extensions["rental_booking"].store
    store.clear()

    print(f"{store.path} has been successfully cleared.")
    print("Tip: Run `python seeds.py` to regenerate demo data.")


if __name__ == "__main__":
    main()
