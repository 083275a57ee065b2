from thngreactor import setupModule

config, logger = setupModule(__name__)
