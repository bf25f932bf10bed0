"""
Activation functions applied after each fully-connected layer.

Each member of `Activation` is a closed variant with a pure `apply`
that maps a 1-D tensor of pre-activations to a new tensor.
"""

from enum import Enum

import torch


class Activation(Enum):
    RELU = 'relu'
    SOFTMAX = 'softmax'
    IDENTITY = 'identity'
    SIGMOID = 'sigmoid'
    TANH = 'tanh'

    @classmethod
    def parse(cls, value):
        """Accept an Activation or its (case-insensitive) name"""
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())

    def apply(self, x):
        if self is Activation.RELU:
            return torch.relu(x)
        if self is Activation.SOFTMAX:
            # Raw exponentials, no max subtraction: large pre-activations overflow.
            exps = torch.exp(x)
            return exps / exps.sum()
        if self is Activation.SIGMOID:
            return torch.sigmoid(x)
        if self is Activation.TANH:
            return torch.tanh(x)
        return x.clone()
