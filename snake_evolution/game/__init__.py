"""
Snake Game Module

This module contains the snake rules, the ray sensors and the headless game
used both for fitness evaluation and for replaying champions.
"""

from .snake import Direction, Move, Position, Segment, Snake, SnakeState
from .sensors import FEATURE_SIZE, DistanceInfo, Distances, encode, get_distances
from .snake_game import SnakeGame, place_food, random_position

__all__ = ['Direction', 'Move', 'Position', 'Segment', 'Snake', 'SnakeState', 'FEATURE_SIZE',
           'DistanceInfo', 'Distances', 'encode', 'get_distances', 'SnakeGame', 'place_food',
           'random_position']
