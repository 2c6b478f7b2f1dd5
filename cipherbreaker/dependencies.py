from typing import Annotated

from fastapi import Depends

from cipherbreaker.core.config import Settings, get_settings
from cipherbreaker.services.dictionary import Dictionary, get_dictionary


# Settings dependency
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Process-wide dictionary, loaded once at startup
DictionaryDep = Annotated[Dictionary, Depends(get_dictionary)]
