from .account import Account
from .token import Application, AccessToken
from .status import Status
from .card import PreviewCard
