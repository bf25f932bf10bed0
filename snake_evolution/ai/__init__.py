"""
AI Module for the evolved Snake player

This module contains the fixed-topology neural network and the genetic
algorithm that evolves its flat weight vector.
"""

from .activations import Activation
from .neural_network import NeuralNetwork, NetworkSpec
from .genetic_algorithm import GeneticAlgorithm, Individual, PopulationOptions

__all__ = ['Activation', 'NeuralNetwork', 'NetworkSpec', 'GeneticAlgorithm', 'Individual',
           'PopulationOptions']
