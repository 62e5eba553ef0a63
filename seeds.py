from rental_booking import create_app
from rental_booking.exceptions import DuplicateError

DEMO_VEHICLES = [
    {"brand": "Toyota", "model": "Corolla", "type": "car", "rate": 45},
    {"brand": "Honda", "model": "Civic", "type": "car", "rate": 50},
    {"brand": "Nissan", "model": "Patrol", "type": "car", "rate": 120},
    {"brand": "Isuzu", "model": "N-Series", "type": "truck", "rate": 95},
]


def ensure_user(services, username: str, password: str, email: str):
    """
    Ensure a user with `username` exists in the store (idempotent).
    Returns the user's ID.
    """
    try:
        return services.users.register(username, password, email)["user_id"]
    except DuplicateError:
        return services.store.find_user(username)["user_id"]


def main():
    app = create_app()
    services = app.extensions["rental_booking"]
    store = services.store

    # ---- Demo account ----
    ensure_user(services, "customer", "Customer123", "customer@example.com")

    # ---- Demo vehicles (create only if none exist) ----
    if not store.vehicles:
        for v in DEMO_VEHICLES:
            store.create_vehicle(v)

    store.save()

    print("Seed complete.")
    print("Customer login:  customer / Customer123")
    for vid, v in store.vehicles.items():
        print(f"  {vid}  {v['brand']} {v['model']}  {v['rate']}/day")


if __name__ == "__main__":
    main()
