from .accountserializer import AccountSerializer
from .applicationserializer import ApplicationSerializer
from .previewcardserializer import PreviewCardSerializer
from .statusserializer import StatusSerializer
from .statuscreateserializer import StatusCreateSerializer
