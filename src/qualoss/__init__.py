__version__ = "0.2.0"
__author__ = "Sangjin Lee"
