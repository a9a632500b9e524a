import random
from enum import Enum

import autograd.numpy as np  # type: ignore

# Constants of the scaled exponential linear unit
SELU_LAMBDA = 1.0507009873554805
SELU_ALPHA  = 1.6732632423543772

def sigmoid_activation(z):
    Z = np.clip(5.0 * z, -60.0, 60.0)   # to prevent under/overflow when calculating exp
    return 1.0 / (1.0 + np.exp(-Z))

def tanh_activation(z):
    return np.tanh(np.clip(2.5 * z, -60.0, 60.0))

def sin_activation(z):
    return np.sin(np.clip(5.0 * z, -60.0, 60.0))

def gauss_activation(z):
    return -5.0 * np.clip(z, -3.4, 3.4) ** 2

def relu_activation(z):
    return np.where(z > 0.0, z, 0.0)

def elu_activation(z):
    # Clip the negative branch so that exp never sees a large positive value
    return np.where(z > 0.0, z, np.expm1(np.minimum(z, 0.0)))

def lelu_activation(z):
    return np.where(z > 0.0, z, 0.005 * z)

def selu_activation(z):
    return np.where(z > 0.0, SELU_LAMBDA * z, SELU_LAMBDA * SELU_ALPHA * np.expm1(np.minimum(z, 0.0)))

def softplus_activation(z):
    Z = np.clip(5.0 * z, -60.0, 60.0)
    return 0.2 * np.log10(1.0 + np.exp(Z))

def identity_activation(z):
    return z

def clamped_activation(z):
    return np.clip(z, -1.0, 1.0)

def inverse_activation(z):
    # The reciprocal of exactly zero is defined as zero
    z_safe = np.where(z == 0.0, 1.0, z)
    return np.where(z == 0.0, 0.0, 1.0 / z_safe)

def log_activation(z):
    # Returns log10(1e-7) = -7 for z <= 1e-7
    z_safe = np.maximum(z, 1e-7)
    return np.log10(z_safe)

def exponential_activation(z):
    return np.exp(np.clip(z, -60.0, 60.0))

def abs_activation(z):
    return np.abs(z)

def hat_activation(z):
    return np.maximum(0.0, 1.0 - np.abs(z))

def square_activation(z):
    # Clip input to avoid overflow (±1e154 squared stays within float64 range)
    z_clipped = np.clip(z, -1e154, 1e154)
    return z_clipped ** 2

def cube_activation(z):
    # Clip input to avoid overflow (±1e102 cubed stays within float64 range)
    z_clipped = np.clip(z, -1e102, 1e102)
    return z_clipped ** 3

activations = {
    "sigmoid"    : sigmoid_activation,
    "tanh"       : tanh_activation,
    "sin"        : sin_activation,
    "gauss"      : gauss_activation,
    "relu"       : relu_activation,
    "elu"        : elu_activation,
    "lelu"       : lelu_activation,
    "selu"       : selu_activation,
    "softplus"   : softplus_activation,
    "identity"   : identity_activation,
    "clamped"    : clamped_activation,
    "inverse"    : inverse_activation,
    "log"        : log_activation,
    "exponential": exponential_activation,
    "abs"        : abs_activation,
    "hat"        : hat_activation,
    "square"     : square_activation,
    "cube"       : cube_activation
    }

# 3-letter identifiers for each activation function
activation_codes = {
    "sigmoid"    : "SIG",
    "tanh"       : "TNH",
    "sin"        : "SIN",
    "gauss"      : "GAU",
    "relu"       : "RLU",
    "elu"        : "ELU",
    "lelu"       : "LLU",
    "selu"       : "SLU",
    "softplus"   : "SFP",
    "identity"   : "IDN",
    "clamped"    : "CLP",
    "inverse"    : "INV",
    "log"        : "LOG",
    "exponential": "EXP",
    "abs"        : "ABS",
    "hat"        : "HAT",
    "square"     : "SQR",
    "cube"       : "CUB"
    }

class ActivationFunction(Enum):
    """
    The closed set of activation functions a node can carry.

    Each member's value is the name under which the corresponding
    function is registered in the 'activations' dictionary.
    """
    SIGMOID     = "sigmoid"
    TANH        = "tanh"
    SIN         = "sin"
    GAUSS       = "gauss"
    RELU        = "relu"
    ELU         = "elu"
    LELU        = "lelu"
    SELU        = "selu"
    SOFTPLUS    = "softplus"
    IDENTITY    = "identity"
    CLAMPED     = "clamped"
    INVERSE     = "inverse"
    LOG         = "log"
    EXPONENTIAL = "exponential"
    ABS         = "abs"
    HAT         = "hat"
    SQUARE      = "square"
    CUBE        = "cube"

    @property
    def function(self):
        return activations[self.value]

    @property
    def code(self) -> str:
        return activation_codes[self.value]

    def activate(self, z: float) -> float:
        return float(self.function(z))

    @classmethod
    def random(cls, rng: random.Random) -> 'ActivationFunction':
        """Draw an activation function uniformly at random."""
        return rng.choice(list(cls))
