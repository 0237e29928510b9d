from ._options import VALID_TRANSPORT_OPTIONS, transport_options
from ._params import ParamKind, classify_param, encode_params, serialize_param

__all__ = [
    "VALID_TRANSPORT_OPTIONS",
    "ParamKind",
    "classify_param",
    "encode_params",
    "serialize_param",
    "transport_options",
]
