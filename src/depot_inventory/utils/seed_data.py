# Sample catalogue used by the ``seed`` action on an empty collection
SAMPLE_PRODUCTS = [
    {
        "nom": "Ordinateur Portable Dell XPS 13",
        "categorie": "Électronique",
        "quantite": 25,
        "prixUnitaire": 1200,
        "seuilAlerte": 10,
        "metadata": {
            "fournisseur": "Dell Technologies",
            "reference": "XPS13-2024",
            "description": "Ordinateur portable ultra-fin 13 pouces",
            "emplacement": "Entrepôt A - Étagère 1",
        },
    },
    {
        "nom": "Souris Sans Fil Logitech MX Master 3",
        "categorie": "Accessoires",
        "quantite": 150,
        "prixUnitaire": 89,
        "seuilAlerte": 50,
        "metadata": {
            "fournisseur": "Logitech",
            "reference": "MX-MASTER-3",
            "description": "Souris ergonomique sans fil haute précision",
            "emplacement": "Entrepôt B - Étagère 3",
        },
    },
    {
        "nom": "Clavier Mécanique Corsair K95",
        "categorie": "Accessoires",
        "quantite": 75,
        "prixUnitaire": 180,
        "seuilAlerte": 20,
        "metadata": {
            "fournisseur": "Corsair",
            "reference": "K95-RGB-PLATINUM",
            "description": "Clavier mécanique gaming RGB",
            "emplacement": "Entrepôt B - Étagère 2",
        },
    },
    {
        "nom": "Écran 4K Samsung 27 pouces",
        "categorie": "Électronique",
        "quantite": 8,
        "prixUnitaire": 450,
        "seuilAlerte": 10,
        "metadata": {
            "fournisseur": "Samsung",
            "reference": "U28E590D",
            "emplacement": "Entrepôt A - Étagère 3",
        },
    },
]
