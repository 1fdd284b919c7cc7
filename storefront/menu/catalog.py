"""Static menu catalog"""

from typing import Dict, FrozenSet, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class MenuItem(BaseModel):
    """Immutable catalog entry. Prices are whole SEK."""

    model_config = ConfigDict(frozen=True)

    id: str
    category: str
    name: str
    price: int
    description: Optional[str] = None
    number: Optional[int] = None
    tags: FrozenSet[str] = frozenset()


HAM = "Pizzor med skinka"
MINCE = "Köttfärspizzor"
VEGETARIAN = "Vegetariska pizzor"
SEAFOOD = "Skaldjurspizzor"
CALZONE = "Inbakade pizzor"
SALAMI = "Salamipizzor"
GYROS = "Gyrospizzor"
KEBAB = "Kebab & rätter"
CHICKEN = "Kyckling"
MEXICAN = "Mexikanska pizzor"
FILLET = "Oxfilé & fläskfilé"
HALF_CALZONE = "Halvinbakad"
PARMA = "Parma & ruccola"
PASTA = "Pasta"
SALADS = "Sallader"
DRINKS = "Dryck & Tillbehör"


def _pizza(number: int, slug: str, category: str, name: str, description: str, price: int, *tags: str) -> MenuItem:
    return MenuItem(
        id=f"{number}-{slug}",
        category=category,
        number=number,
        name=name,
        description=description,
        price=price,
        tags=frozenset(tags),
    )


MENU: Tuple[MenuItem, ...] = (
    _pizza(1, "margherita", HAM, "Margherita", "ost", 130),
    _pizza(2, "vesuvio", HAM, "Vesuvio", "skinka", 130),
    _pizza(3, "funghi", HAM, "Funghi", "champinjoner", 130),
    _pizza(4, "rivuera", HAM, "Rivuera", "räkor, champinjoner", 135, "Skaldjur"),
    _pizza(5, "hawaii", HAM, "Hawaii", "skinka, ananas", 130),
    _pizza(6, "la-bussola", HAM, "La Bussola", "skinka, räkor", 135, "Skaldjur"),
    _pizza(7, "opera", HAM, "Opera", "skinka, tonfisk", 130),
    _pizza(8, "capricciosa", HAM, "Capricciosa", "skinka, champinjoner", 130),
    _pizza(9, "banana", HAM, "Banana", "skinka, banan, curry", 130),
    _pizza(10, "florida", HAM, "Florida", "skinka, banan, ananas, curry", 140),
    _pizza(11, "vera", HAM, "Vera", "skinka, champinjoner, räkor, paprika, lök", 145, "Skaldjur"),
    _pizza(12, "bella", HAM, "Bella", "skinka, champinjoner, räkor", 140, "Skaldjur"),
    _pizza(13, "husets-gratinerad", HAM, "Husets (gratinerad)", "skinka, champinjoner, räkor, paprika, lök", 145, "Skaldjur"),
    _pizza(14, "gorgonzola", HAM, "Gorgonzola", "skinka, färska tomater, lök, gorgonzola", 140),
    _pizza(15, "quatro-stagioni", HAM, "Quatro Stagioni", "skinka, räkor, champinjoner, musslor, kronärtskocka, oliver", 145, "Skaldjur"),
    _pizza(16, "piloten", HAM, "Piloten", "skinka, bacon, lök, oliver", 135),

    _pizza(17, "annelis-special", MINCE, "Annelis special", "skinka, köttfärs, ananas", 140),
    _pizza(18, "caramba", MINCE, "Caramba", "köttfärs, champinjoner, lök, bearnaisesås", 145),
    _pizza(19, "helins-special", MINCE, "Helins special", "köttfärs, bacon, lök", 140),
    _pizza(20, "oriantale", MINCE, "Oriantale", "köttfärs, champinjoner, lök, svartpeppar, ägg", 140),
    _pizza(21, "bolognese", MINCE, "Bolognese", "köttfärs, champinjoner, lök", 135),

    _pizza(22, "vegetariana", VEGETARIAN, "Pizza vegetariana", "champinjoner, lök, paprika, ananas, oliver, kronärtskocka", 140, "Vegetarisk"),
    _pizza(23, "olympos", VEGETARIAN, "Olympos", "fetaost, lök, feferoni, oliver", 140, "Vegetarisk"),
    _pizza(24, "treviso", VEGETARIAN, "Treviso", "mozzarella, fetaost, soltorkade tomater, pressad vitlök", 145, "Vegetarisk"),
    _pizza(25, "quattro-formaggio", VEGETARIAN, "Quattro Formaggio", "pizzaost, fetaost, mozzarella, gorgonzola", 145, "Vegetarisk"),
    _pizza(26, "carpresse", VEGETARIAN, "Carpresse", "mozzarella, lök, oliver, färsk tomat, pesto", 145, "Vegetarisk"),
    _pizza(27, "rostica", VEGETARIAN, "Rostica", "mozzarella, feferoni, färsk tomat, pesto", 135, "Vegetarisk"),
    _pizza(28, "il-forno-special", VEGETARIAN, "Il Forno special", "ej pizzaost, champinjoner, fetaost, lök, färsk tomat, paprika, ruccola", 140, "Vegetarisk"),

    _pizza(29, "al-tono", SEAFOOD, "Al tono", "tonfisk, lök", 130, "Skaldjur"),
    _pizza(30, "torshalla", SEAFOOD, "Torshälla", "tonfisk, räkor", 135, "Skaldjur"),
    _pizza(31, "milos", SEAFOOD, "Milo`s", "tonfisk, paprika, lök, oliver, pesto", 140, "Skaldjur"),
    _pizza(32, "marinara", SEAFOOD, "Marinara", "räkor, musslor", 135, "Skaldjur"),
    _pizza(33, "vastkustspecial", SEAFOOD, "Västkustspecial", "tonfisk, räkor, musslor, sardeller", 145, "Skaldjur"),

    _pizza(34, "calzone", CALZONE, "Calzone", "skinka", 135, "Inbakad"),
    _pizza(35, "calzone-special", CALZONE, "Calzone special", "skinka, räkor, champinjoner", 145, "Inbakad", "Skaldjur"),

    _pizza(36, "salame", SALAMI, "Salame", "salami", 135),
    _pizza(37, "milano", SALAMI, "Milano", "salami, lök, paprika", 140),
    _pizza(38, "parma", SALAMI, "Parma", "salami, gorgonzola", 140),
    _pizza(39, "peperoni", SALAMI, "Peperoni", "salami, feferoni", 140),

    _pizza(40, "gyros", GYROS, "Gyros", "gyros, lök, feferoni, tzatziki", 145),
    _pizza(41, "gyros-special", GYROS, "Gyros special", "gyros, champinjoner, lök, feferoni, tzatziki", 150),

    _pizza(42, "kebabpizza", KEBAB, "Kebabpizza", "kebabkött, lök, feferoni, kebabsås", 150, "Kebab"),
    _pizza(43, "kebabpizza-special", KEBAB, "Kebabpizza special", "kebabkött, champinjoner, lök, feferoni, kebabsås", 155, "Kebab"),
    _pizza(44, "kebabrulle", KEBAB, "Kebabrulle", "kebabkött, sallad, tomat, gurka, lök, feferoni, kebabsås", 135, "Kebab"),
    _pizza(45, "kebabtallrik", KEBAB, "Kebabtallrik", "kebabkött, pommes, sallad, tomat, gurka, lök, feferoni, kebabsås", 155, "Kebab"),
    _pizza(46, "kebabrulle-brod", KEBAB, "Kebabrulle (bröd)", "kebabkött, sallad, tomat, gurka, lök, feferoni, kebabsås", 135, "Kebab"),

    _pizza(47, "kycklingpizza", CHICKEN, "Kycklingpizza", "kyckling, lök, feferoni, vitlökssås", 150),
    _pizza(48, "kycklingpizza-special", CHICKEN, "Kycklingpizza special", "kyckling, champinjoner, lök, feferoni, vitlökssås", 155),
    _pizza(49, "kycklingrulle", CHICKEN, "Kycklingrulle", "kyckling, sallad, tomat, gurka, lök, feferoni, vitlökssås", 135),
    _pizza(50, "kycklingtallrik", CHICKEN, "Kycklingtallrik", "kyckling, pommes, sallad, tomat, gurka, lök, feferoni, vitlökssås", 155),

    _pizza(51, "mexicana", MEXICAN, "Mexicana", "taco kryddad köttfärs, lök, jalapeño, tacosås", 145, "Stark"),
    _pizza(52, "mexicana-special", MEXICAN, "Mexicana special", "taco kryddad köttfärs, lök, jalapeño, tacosås, nachochips", 150, "Stark"),

    _pizza(53, "oxfile", FILLET, "Oxfilépizza", "oxfilé, lök, champinjoner, bearnaisesås", 165),
    _pizza(54, "flaskfile", FILLET, "Fläskfilépizza", "fläskfilé, lök, champinjoner, bearnaisesås", 165),

    _pizza(55, "halvinbakad", HALF_CALZONE, "Halvinbakad", "skinka, champinjoner, räkor", 150, "Skaldjur"),
    _pizza(56, "parma-ruccola", PARMA, "Parma & ruccola", "parmaskinka, ruccola, färska tomater, parmesan", 165),

    _pizza(57, "pasta-bolognese", PASTA, "Pasta Bolognese", "klassisk köttfärssås", 145),
    _pizza(58, "pasta-carbonara", PASTA, "Pasta Carbonara", "bacon, grädde", 145),

    _pizza(59, "grekisk-sallad", SALADS, "Grekisk sallad", "fetaost, oliver, grönsaker", 135, "Vegetarisk"),
    _pizza(60, "kycklingsallad", SALADS, "Kycklingsallad", "kyckling, grönsaker", 145),

    MenuItem(id="dryck-burk-33cl", category=DRINKS, name="Burk 33cl", price=20),
    MenuItem(id="dryck-flaska-50cl", category=DRINKS, name="Flaska 50cl", price=25),
    MenuItem(id="dryck-flaska-15l", category=DRINKS, name="Flaska 1,5l", price=35),
    MenuItem(id="tillbehor-bearnaisesas", category=DRINKS, name="Bearnaisesås", price=20),
    MenuItem(id="tillbehor-vitlokssas", category=DRINKS, name="Vitlökssås", price=20),
    MenuItem(id="tillbehor-pizzasallad", category=DRINKS, name="Pizzasallad", price=20),
)

CATEGORY_ORDER: Tuple[str, ...] = (
    HAM,
    DRINKS,
    MINCE,
    VEGETARIAN,
    SEAFOOD,
    CALZONE,
    SALAMI,
    GYROS,
    KEBAB,
    CHICKEN,
    MEXICAN,
    FILLET,
    HALF_CALZONE,
    PARMA,
    PASTA,
    SALADS,
)


class MenuCatalog:
    """Read-only lookup over a set of menu items"""

    def __init__(self, items=MENU):
        self._items: Dict[str, MenuItem] = {item.id: item for item in items}
        self._by_name: Dict[str, MenuItem] = {item.name.casefold(): item for item in items}

    def get(self, item_id: str) -> Optional[MenuItem]:
        return self._items.get(item_id)

    def find_by_name(self, name: str) -> Optional[MenuItem]:
        """Case-insensitive lookup by display name"""
        return self._by_name.get((name or "").strip().casefold())

    def __contains__(self, item_id: str) -> bool:
        return item_id in self._items

    def all(self) -> List[MenuItem]:
        """Items grouped in display category order"""
        rank = {category: index for index, category in enumerate(CATEGORY_ORDER)}
        return sorted(
            self._items.values(),
            key=lambda item: (rank.get(item.category, len(rank)), item.number or 0, item.name),
        )


catalog = MenuCatalog()
