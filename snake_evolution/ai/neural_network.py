"""
Fixed-topology feed-forward network driven by a flat weight vector.

Layer i holds a (layer_sizes[i+1], layer_sizes[i]) weight matrix and no
bias. The flat buffer is read as consecutive row-major chunks, one per
layer, which is exactly the layout of `nn.Linear.weight`.
"""

from dataclasses import dataclass

import numpy as np
import torch
import torch.nn as nn

from ..errors import InputSizeMismatchError, ShapeMismatchError, WeightCountMismatchError
from .activations import Activation


@dataclass(frozen=True)
class NetworkSpec:
    """Layer sizes plus one activation per weighted layer"""
    layer_sizes: tuple
    activations: tuple

    def __post_init__(self):
        object.__setattr__(self, 'layer_sizes', tuple(int(size) for size in self.layer_sizes))
        object.__setattr__(self, 'activations', tuple(Activation.parse(a) for a in self.activations))
        self.validate()

    def validate(self):
        if len(self.layer_sizes) < 2:
            raise ShapeMismatchError(
                f"Network needs at least 2 layers, got {len(self.layer_sizes)}")
        if any(size <= 0 for size in self.layer_sizes):
            raise ShapeMismatchError(f"Layer sizes must be positive: {list(self.layer_sizes)}")
        if len(self.activations) != len(self.layer_sizes) - 1:
            raise ShapeMismatchError(
                f"Activations len: {len(self.activations)} must be layers len: "
                f"{len(self.layer_sizes)} - 1")

    @property
    def input_size(self):
        return self.layer_sizes[0]

    @property
    def output_size(self):
        return self.layer_sizes[-1]

    @property
    def weight_count(self):
        return sum(n_in * n_out for n_in, n_out in zip(self.layer_sizes, self.layer_sizes[1:]))


class NeuralNetwork(nn.Module):
    def __init__(self, spec, weights=None, device=None, generator=None):
        # Build the network for `spec`
        # Args:
        #   spec: NetworkSpec describing layer sizes and activations
        #   weights: optional flat weight buffer; random in [-1, 1) when omitted
        #   device: torch device (defaults to cpu, the network is tiny)
        #   generator: optional torch.Generator for the random initial weights
        super(NeuralNetwork, self).__init__()
        spec.validate()
        self.spec = spec
        self.device = device or torch.device("cpu")

        self.layers = nn.ModuleList(
            nn.Linear(n_in, n_out, bias=False, dtype=torch.float64)
            for n_in, n_out in zip(spec.layer_sizes, spec.layer_sizes[1:])
        )
        self.to(self.device)

        if weights is None:
            with torch.no_grad():
                for param in self.parameters():
                    param.uniform_(-1.0, 1.0, generator=generator)
        else:
            self.update_weights(weights)

    def forward(self, x):
        for layer, activation in zip(self.layers, self.spec.activations):
            x = activation.apply(layer(x))
        return x

    def infer(self, inputs):
        """Run one forward pass and return the output vector as a numpy array"""
        inputs = torch.as_tensor(np.asarray(inputs, dtype=np.float64), device=self.device)
        if inputs.dim() != 1 or inputs.numel() != self.spec.input_size:
            raise InputSizeMismatchError(
                f"Input len: {inputs.numel()} doesn't match network input len: {self.spec.input_size}")
        with torch.no_grad():
            output = self.forward(inputs)
        return output.cpu().numpy()

    def act(self, inputs):
        """Index of the strongest output neuron"""
        return int(np.argmax(self.infer(inputs)))

    def get_weights(self):
        # Extract all weights as a flat numpy array
        weights = []
        for param in self.parameters():
            weights.extend(param.data.flatten().cpu().numpy())
        return np.array(weights, dtype=np.float64)

    def update_weights(self, weights):
        # Copy a flat weight buffer into the existing parameters, no reallocation
        flat = torch.as_tensor(np.asarray(weights, dtype=np.float64).reshape(-1))
        if flat.numel() != self.spec.weight_count:
            raise WeightCountMismatchError(
                f"Weights len: {flat.numel()} doesn't match network weight count: "
                f"{self.spec.weight_count}")

        idx = 0
        with torch.no_grad():
            for param in self.parameters():
                param_size = param.numel()
                param.copy_(flat[idx:idx + param_size].reshape(param.shape))
                idx += param_size
