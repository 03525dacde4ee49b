from tredcental.models import Gear

AVAILABLE_GEAR = (
    Gear(1, "Tenda Dome (4 Orang)", 50000, "https://picsum.photos/seed/tent/400/300", "Shelter"),
    Gear(2, "Sleeping Bag Hangat", 25000, "https://picsum.photos/seed/sleepingbag/400/300", "Sleeping"),
    Gear(3, "Kompor Portable", 20000, "https://picsum.photos/seed/stove/400/300", "Cooking"),
    Gear(4, "Carrier 60L", 40000, "https://picsum.photos/seed/backpack/400/300", "Packs"),
    Gear(5, "Lampu Tenda LED", 15000, "https://picsum.photos/seed/lantern/400/300", "Lighting"),
    Gear(6, "Kursi Lipat", 15000, "https://picsum.photos/seed/chair/400/300", "Furniture"),
    Gear(7, "Matras Angin", 20000, "https://picsum.photos/seed/mat/400/300", "Sleeping"),
    Gear(8, "Cooking Set", 30000, "https://picsum.photos/seed/cookset/400/300", "Cooking"),
    Gear(9, "Headlamp", 10000, "https://picsum.photos/seed/headlamp/400/300", "Lighting"),
)

PERIOD_DATES = "dates"
PERIOD_DAYS = "days"

RECEIPT_TITLE = "Struk Sewa"
RECEIPT_FOOTER = "Terima kasih telah menyewa di {shop}!"
