# Common grape varietals found on TTB-regulated wine labels.
GRAPE_VARIETALS = (
    # Red
    "Cabernet Sauvignon",
    "Merlot",
    "Pinot Noir",
    "Syrah",
    "Shiraz",
    "Zinfandel",
    "Malbec",
    "Tempranillo",
    "Sangiovese",
    "Nebbiolo",
    "Barbera",
    "Grenache",
    "Mourvèdre",
    "Petite Sirah",
    "Petit Verdot",
    "Cabernet Franc",
    "Carménère",
    "Montepulciano",
    "Primitivo",
    "Pinotage",
    "Tannat",
    "Touriga Nacional",
    "Dolcetto",
    "Gamay",
    "Corvina",
    "Nero d'Avola",
    "Aglianico",
    # White
    "Chardonnay",
    "Sauvignon Blanc",
    "Riesling",
    "Pinot Grigio",
    "Pinot Gris",
    "Moscato",
    "Muscat",
    "Gewürztraminer",
    "Viognier",
    "Albariño",
    "Chenin Blanc",
    "Sémillon",
    "Grüner Veltliner",
    "Torrontés",
    "Verdejo",
    "Vermentino",
    "Marsanne",
    "Roussanne",
    "Trebbiano",
    "Garganega",
    "Fiano",
    "Falanghina",
    "Cortese",
    "Arneis",
    "Godello",
    "Txakoli",
    # Rosé / sparkling
    "Grenache Rosé",
    "Pinot Meunier",
    "Glera",
)
