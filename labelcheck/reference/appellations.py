# American Viticultural Areas, state appellations and common import regions
# seen on US-market wine labels.
APPELLATIONS = (
    # California
    "Napa Valley",
    "Sonoma Coast",
    "Sonoma County",
    "Russian River Valley",
    "Alexander Valley",
    "Dry Creek Valley",
    "Paso Robles",
    "Santa Barbara County",
    "Santa Ynez Valley",
    "Sta. Rita Hills",
    "Central Coast",
    "North Coast",
    "Lodi",
    "Sierra Foothills",
    "Livermore Valley",
    "Monterey",
    "Santa Lucia Highlands",
    "Anderson Valley",
    "Mendocino",
    "Carneros",
    "Los Carneros",
    "Oakville",
    "Rutherford",
    "Stags Leap District",
    "Howell Mountain",
    "Atlas Peak",
    "Mount Veeder",
    "Spring Mountain District",
    "Calistoga",
    "Diamond Mountain District",
    "Temecula Valley",
    # Oregon
    "Willamette Valley",
    "Dundee Hills",
    "Eola-Amity Hills",
    "Chehalem Mountains",
    "Ribbon Ridge",
    "Umpqua Valley",
    "Rogue Valley",
    # Washington
    "Columbia Valley",
    "Walla Walla Valley",
    "Yakima Valley",
    "Red Mountain",
    "Horse Heaven Hills",
    "Wahluke Slope",
    # Other US
    "Finger Lakes",
    "Long Island",
    "Virginia",
    "Texas Hill Country",
    "Snake River Valley",
    # State level
    "California",
    "Oregon",
    "Washington",
    "New York",
    "American",
    # International
    "Bordeaux",
    "Burgundy",
    "Champagne",
    "Côtes du Rhône",
    "Cotes du Rhone",
    "Loire Valley",
    "Alsace",
    "Languedoc",
    "Provence",
    "Tuscany",
    "Piedmont",
    "Rioja",
    "Ribera del Duero",
    "Barossa Valley",
    "McLaren Vale",
    "Marlborough",
    "Stellenbosch",
    "Mendoza",
)
