"""Small offline gazetteer for place search when the geocoder is unreachable."""

from birthwheel.models import Place

CITIES: tuple[Place, ...] = (
    Place("New York", "United States", 40.7128, -74.006, admin1="NY"),
    Place("Los Angeles", "United States", 34.0522, -118.2437, admin1="CA"),
    Place("Chicago", "United States", 41.8781, -87.6298, admin1="IL"),
    Place("Miami", "United States", 25.7617, -80.1918, admin1="FL"),
    Place("San Francisco", "United States", 37.7749, -122.4194, admin1="CA"),
    Place("Seattle", "United States", 47.6062, -122.3321, admin1="WA"),
    Place("Toronto", "Canada", 43.6532, -79.3832, admin1="ON"),
    Place("Vancouver", "Canada", 49.2827, -123.1207, admin1="BC"),
    Place("Mexico City", "Mexico", 19.4326, -99.1332),
    Place("São Paulo", "Brazil", -23.55, -46.6333),
    Place("Buenos Aires", "Argentina", -34.6037, -58.3816),
    Place("London", "United Kingdom", 51.5074, -0.1278),
    Place("Paris", "France", 48.8566, 2.3522),
    Place("Berlin", "Germany", 52.52, 13.405),
    Place("Madrid", "Spain", 40.4168, -3.7038),
    Place("Rome", "Italy", 41.9028, 12.4964),
    Place("Amsterdam", "Netherlands", 52.3676, 4.9041),
    Place("Stockholm", "Sweden", 59.3293, 18.0686),
    Place("Oslo", "Norway", 59.9139, 10.7522),
    Place("Copenhagen", "Denmark", 55.6761, 12.5683),
    Place("Helsinki", "Finland", 60.1699, 24.9384),
    Place("Dublin", "Ireland", 53.3498, -6.2603),
    Place("Zurich", "Switzerland", 47.3769, 8.5417),
    Place("Vienna", "Austria", 48.2082, 16.3738),
    Place("Prague", "Czechia", 50.0755, 14.4378),
    Place("Warsaw", "Poland", 52.2297, 21.0122),
    Place("Athens", "Greece", 37.9838, 23.7275),
    Place("Istanbul", "Türkiye", 41.0082, 28.9784),
    Place("Moscow", "Russia", 55.7558, 37.6173),
    Place("Dubai", "United Arab Emirates", 25.2048, 55.2708),
    Place("Tel Aviv", "Israel", 32.0853, 34.7818),
    Place("Cairo", "Egypt", 30.0444, 31.2357),
    Place("Johannesburg", "South Africa", -26.2041, 28.0473),
    Place("Nairobi", "Kenya", -1.2921, 36.8219),
    Place("Lagos", "Nigeria", 6.5244, 3.3792),
    Place("Delhi", "India", 28.6139, 77.209),
    Place("Mumbai", "India", 19.076, 72.8777),
    Place("Bengaluru", "India", 12.9716, 77.5946),
    Place("Dhaka", "Bangladesh", 23.8103, 90.4125),
    Place("Karachi", "Pakistan", 24.8607, 67.0011),
    Place("Bangkok", "Thailand", 13.7563, 100.5018),
    Place("Singapore", "Singapore", 1.3521, 103.8198),
    Place("Jakarta", "Indonesia", -6.2088, 106.8456),
    Place("Manila", "Philippines", 14.5995, 120.9842),
    Place("Tokyo", "Japan", 35.6762, 139.6503),
    Place("Seoul", "South Korea", 37.5665, 126.978),
    Place("Osaka", "Japan", 34.6937, 135.5023),
    Place("Beijing", "China", 39.9042, 116.4074),
    Place("Shanghai", "China", 31.2304, 121.4737),
    Place("Hong Kong", "China", 22.3193, 114.1694),
    Place("Sydney", "Australia", -33.8688, 151.2093),
    Place("Melbourne", "Australia", -37.8136, 144.9631),
    Place("Auckland", "New Zealand", -36.8485, 174.7633),
)


def search_offline(query: str) -> tuple[Place, ...]:
    """Case-insensitive substring match against "name, admin1, country"."""
    q = query.strip().lower()
    if not q:
        return ()
    return tuple(p for p in CITIES if q in p.label.lower())
