"""Slug token tables for Hemnet URLs

Iteration order is significant: the slug parser takes the first entry that
matches, so more specific keys must come before keys they contain.
"""

from types import MappingProxyType

PROPERTY_TYPES = MappingProxyType({
    "lagenhet": "Lägenhet",
    "villa": "Villa",
    "radhus": "Radhus",
    "fritidshus": "Fritidshus",
    "tomt": "Tomt",
    "par": "Parhus",
    "kedjehus": "Kedjehus",
    "gard": "Gård",
})

MUNICIPALITIES = MappingProxyType({
    "stockholms-kommun": "Stockholm",
    "goteborgs-kommun": "Göteborg",
    "goteborgs-stad": "Göteborg",
    "malmo-kommun": "Malmö",
    "malmo-stad": "Malmö",
    "uppsalas-kommun": "Uppsala",
    "uppsala-kommun": "Uppsala",
    "vasteras-kommun": "Västerås",
    "vasteras-stad": "Västerås",
    "orebro-kommun": "Örebro",
    "linkopings-kommun": "Linköping",
    "helsingborgs-kommun": "Helsingborg",
    "helsingborgs-stad": "Helsingborg",
    "jonkopings-kommun": "Jönköping",
    "norrkopings-kommun": "Norrköping",
    "lunds-kommun": "Lund",
    "umea-kommun": "Umeå",
    "gavle-kommun": "Gävle",
    "boras-kommun": "Borås",
    "boras-stad": "Borås",
    "sodertalje-kommun": "Södertälje",
    "eskilstuna-kommun": "Eskilstuna",
    "halmstads-kommun": "Halmstad",
    "vaxjo-kommun": "Växjö",
    "karlstads-kommun": "Karlstad",
    "sundsvalls-kommun": "Sundsvall",
    "trollhattans-kommun": "Trollhättan",
    "ostersunds-kommun": "Östersund",
    "kalmar-kommun": "Kalmar",
    "faluns-kommun": "Falun",
    "nacka-kommun": "Nacka",
    "solna-kommun": "Solna",
    "solna-stad": "Solna",
    "sollentuna-kommun": "Sollentuna",
    "taby-kommun": "Täby",
    "lidingo-kommun": "Lidingö",
    "lidingo-stad": "Lidingö",
    "danderyds-kommun": "Danderyd",
    "huddinge-kommun": "Huddinge",
    "jarfalla-kommun": "Järfälla",
    "haninge-kommun": "Haninge",
    "botkyrka-kommun": "Botkyrka",
    "tyreso-kommun": "Tyresö",
    "sundbybergs-kommun": "Sundbyberg",
    "sundbybergs-stad": "Sundbyberg",
    "vallentuna-kommun": "Vallentuna",
    "varmdo-kommun": "Värmdö",
    "osterakers-kommun": "Österåker",
    "salems-kommun": "Salem",
    "upplands-vasby-kommun": "Upplands Väsby",
    "norrtalje-kommun": "Norrtälje",
    "sigtuna-kommun": "Sigtuna",
})

# Neighbourhood slugs whose display name needs Swedish characters back.
# Anything not listed is title-cased as-is.
NEIGHBOURHOODS = MappingProxyType({
    "sodermalm": "Södermalm",
    "ostermalm": "Östermalm",
    "norrmalm": "Norrmalm",
    "vasastan": "Vasastan",
    "kungsholmen": "Kungsholmen",
    "gamla-stan": "Gamla stan",
    "hammarby-sjostad": "Hammarby sjöstad",
    "sodra-hammarbyhamnen": "Södra Hammarbyhamnen",
    "liljeholmen": "Liljeholmen",
    "hagersten": "Hägersten",
    "arsta": "Årsta",
    "johanneshov": "Johanneshov",
    "bromma": "Bromma",
    "sundbyberg": "Sundbyberg",
    "majorna": "Majorna",
    "linne": "Linné",
    "hisingen": "Hisingen",
    "orgryte": "Örgryte",
    "mollevangen": "Möllevången",
    "vastra-hamnen": "Västra hamnen",
    "limhamn": "Limhamn",
})
