"""City registry - Static configuration.

One provincial capital per Indonesian province. Weather is fetched for
each entry, in this order, on every render cycle.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CityRegistryEntry:
    """A city whose current weather is shown on the map.

    Attributes:
        province: Province name
        name: City name
        latitude: City latitude
        longitude: City longitude
    """
    province: str
    name: str
    latitude: float
    longitude: float

    @property
    def position(self) -> tuple[float, float]:
        """Return (longitude, latitude) tuple."""
        return (self.longitude, self.latitude)


CITY_REGISTRY: tuple[CityRegistryEntry, ...] = (
    CityRegistryEntry("Aceh", "Banda Aceh", 5.5483, 95.3238),
    CityRegistryEntry("Sumatera Utara", "Medan", 3.5952, 98.6722),
    CityRegistryEntry("Sumatera Barat", "Padang", -0.9471, 100.4172),
    CityRegistryEntry("Riau", "Pekanbaru", 0.5071, 101.4478),
    CityRegistryEntry("Kepulauan Riau", "Tanjung Pinang", 0.9185, 104.4583),
    CityRegistryEntry("Jambi", "Jambi", -1.6101, 103.6131),
    CityRegistryEntry("Sumatera Selatan", "Palembang", -2.9761, 104.7754),
    CityRegistryEntry("Kepulauan Bangka Belitung", "Pangkal Pinang", -2.1291, 106.109),
    CityRegistryEntry("Bengkulu", "Bengkulu", -3.7956, 102.2608),
    CityRegistryEntry("Lampung", "Bandar Lampung", -5.3971, 105.2668),
    CityRegistryEntry("Banten", "Serang", -6.12, 106.1503),
    CityRegistryEntry("DKI Jakarta", "Jakarta", -6.2088, 106.8456),
    CityRegistryEntry("Jawa Barat", "Bandung", -6.9175, 107.6191),
    CityRegistryEntry("Jawa Tengah", "Semarang", -6.9667, 110.4167),
    CityRegistryEntry("DI Yogyakarta", "Yogyakarta", -7.7956, 110.3695),
    CityRegistryEntry("Jawa Timur", "Surabaya", -7.2575, 112.7521),
    CityRegistryEntry("Bali", "Denpasar", -8.6705, 115.2126),
    CityRegistryEntry("Nusa Tenggara Barat", "Mataram", -8.5833, 116.1167),
    CityRegistryEntry("Nusa Tenggara Timur", "Kupang", -10.1772, 123.5971),
    CityRegistryEntry("Kalimantan Barat", "Pontianak", -0.0263, 109.3425),
    CityRegistryEntry("Kalimantan Tengah", "Palangka Raya", -2.208, 113.9145),
    CityRegistryEntry("Kalimantan Selatan", "Banjarmasin", -3.3194, 114.5906),
    CityRegistryEntry("Kalimantan Timur", "Samarinda", -0.5022, 117.1536),
    CityRegistryEntry("Kalimantan Utara", "Tanjung Selor", 2.8401, 117.3731),
    CityRegistryEntry("Sulawesi Utara", "Manado", 1.4748, 124.8421),
    CityRegistryEntry("Sulawesi Tengah", "Palu", -0.8917, 119.8707),
    CityRegistryEntry("Sulawesi Selatan", "Makassar", -5.1477, 119.4327),
    CityRegistryEntry("Sulawesi Tenggara", "Kendari", -3.9985, 122.512),
    CityRegistryEntry("Gorontalo", "Gorontalo", 0.5467, 123.0595),
    CityRegistryEntry("Sulawesi Barat", "Mamuju", -2.6727, 118.8887),
    CityRegistryEntry("Maluku", "Ambon", -3.6954, 128.1814),
    CityRegistryEntry("Maluku Utara", "Ternate", 0.7893, 127.389),
    CityRegistryEntry("Papua", "Jayapura", -2.5489, 140.7182),
    CityRegistryEntry("Papua Barat", "Manokwari", -0.8619, 134.064),
    CityRegistryEntry("Papua Selatan", "Merauke", -8.4932, 140.4018),
    CityRegistryEntry("Papua Tengah", "Nabire", -3.3607, 135.503),
    CityRegistryEntry("Papua Pegunungan", "Wamena", -4.0939, 138.953),
    CityRegistryEntry("Papua Barat Daya", "Sorong", -0.8762, 131.2558),
)
