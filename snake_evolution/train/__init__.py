"""
Training Module for the evolved Snake player

This module contains the headless fitness evaluation and the generation loop.
"""

from .fitness import SnakeFitness, check_network_spec, evaluate, play_episode
from .trainer import SnakeTrainer, TrainingResult, main, plot_evolution_progress

__all__ = ['SnakeFitness', 'check_network_spec', 'evaluate', 'play_episode', 'SnakeTrainer',
           'TrainingResult', 'main', 'plot_evolution_progress']
