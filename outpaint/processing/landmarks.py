DEFAULT_LOCATION = "Eiffel Tower (Paris, France)"
DEFAULT_TOURIST_SPOT = "Eiffel Tower"

LANDMARKS: tuple[str, ...] = (
    "Angkor Wat (Cambodia)",
    "Big Ben and Parliament (London, UK)",
    "Burj Khalifa (Dubai, UAE)",
    "Central Park (New York, USA)",
    "Christ the Redeemer (Rio de Janeiro, Brazil)",
    "Colosseum (Rome, Italy)",
    "Disney World (Orlando, USA)",
    "Eiffel Tower (Paris, France)",
    "Forbidden City (Beijing, China)",
    "Golden Gate Bridge (San Francisco, USA)",
    "Grand Canyon (Arizona, USA)",
    "Great Barrier Reef (Australia)",
    "Great Wall of China (China)",
    "Hagia Sophia (Istanbul, Turkey)",
    "Hollywood Walk of Fame (Los Angeles, USA)",
    "Leaning Tower of Pisa (Pisa, Italy)",
    "Louvre Museum (Paris, France)",
    "Machu Picchu (Peru)",
    "Mount Everest (Nepal/Tibet)",
    "Mount Fuji (Japan)",
    "Notre Dame Cathedral (Paris, France)",
    "Opera House (Sydney, Australia)",
    "Palace of Versailles (Versailles, France)",
    "Petra (Jordan)",
    "Pyramids of Giza (Egypt)",
    "Puerta de Alcalá (Madrid, Spain)",
    "Puerta de Brandeburgo (Berlin, Germany)",
    "Santorini (Greece)",
    "Sagrada Familia (Barcelona, Spain)",
    "Statue of Liberty (New York, USA)",
    "Stonehenge (England, UK)",
    "Taj Mahal (Agra, India)",
    "Times Square (New York, USA)",
    "Tokyo Tower (Tokyo, Japan)",
    "Uluru (Ayers Rock, Australia)",
    "Vatican Museums (Vatican City)",
    "Venice Canals (Venice, Italy)",
    "Victoria Falls (Zambia/Zimbabwe)",
    "Yellowstone National Park (USA)",
    "Yosemite National Park (USA)",
)

_LANDMARK_SET = frozenset(LANDMARKS)


def is_known_location(label: str) -> bool:
    return label in _LANDMARK_SET
