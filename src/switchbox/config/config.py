import os
import platform

from configobj import ConfigObj, ConfigObjError, Section
from validate import Validator

from switchbox.config.options import SwitcherConfig

# The default extension for configuration files
config_extension = '.cfg'

# validation schema for the options of a single switcher
switcher_schema = os.path.join(os.path.dirname(__file__), 'switcher.schema' + config_extension)


def config_flavor(name, flavor=None):
    configname = name if not flavor else name + '.' + flavor
    return configname


def config_filename(name, directory):
    """
    Determines the location of a config file in the given directory.
    """
    return os.path.join(directory, name + config_extension)


def load_config_file_base(file, must_exist=True):
    """
    Loads a configuration file
    :param file:        The configuration file to load
    :param must_exist:  when True, the file must exist or an exception is thrown.
    :return: The ConfigObj instance for the file.
    """
    try:
        return ConfigObj(file, interpolation='Template', file_error=must_exist) \
            if must_exist or os.path.exists(file) else ConfigObj()
    except ConfigObjError as e:
        raise type(e)(str(e) + ' at ' + file)


def config_flavor_file(name, directory, subpart=None) -> ConfigObj:
    """
    Loads a specialization of a config file. The file is named after the base, followed by a period
    and the specialization, if given, otherwise just the base name. A missing file gives an empty config.
    """
    file = config_filename(config_flavor(name, subpart), directory)
    return load_config_file_base(file, False)


def map_os_name(name):
    """
    >>> map_os_name('Windows')
    'windows'
    >>> map_os_name("Darwin")
    'osx'
    """
    name = name.lower()
    if name == 'darwin':
        name = 'osx'
    return name


def os_name():
    return map_os_name(platform.system())


def validate_config(config: ConfigObj, name):
    """
    Validates a config against its configspec, converting values to the types the spec names
    and filling in defaults.
    Raises ConfigObjError when validation fails.
    """
    result = config.validate(Validator())
    if result is not True:
        raise ConfigObjError("the config file %s failed validation %s" % (name, result))
    return config


def load_config(name, directory, configspec=None):
    """
        Loads all the configuration files that relate to the given name.
        Configurations are merged in this order, later values replacing earlier ones:
        - the default specialization
        - the platform specialization
        - the user override in the home directory
        - the base configuration
        The merged configuration is then validated against the configspec.
    :param directory: the location of the configuration files
    :param configspec: the schema file. Defaults to the 'schema' specialization when that file exists.
        When there is no schema, the values are not validated.
    :return: the merged ConfigObj
    """
    if configspec is None:
        schema = config_filename(config_flavor(name, 'schema'), directory)
        configspec = schema if os.path.exists(schema) else None

    config = ConfigObj(configspec=configspec)
    config.merge(config_flavor_file(name, directory, 'default'))
    config.merge(config_flavor_file(name, directory, os_name()))
    config.merge(load_config_file_base(os.path.expanduser('~/' + name + config_extension), must_exist=False))
    config.merge(config_flavor_file(name, directory))

    if configspec is not None:
        validate_config(config, name)
    return config


def fetch_conf_path(conf: Section, path):
    """
    Retrieves the named configuration section
    :param conf:        The root configuration
    :param path:        An iterable that lists the names of the sections to resolve
    :return: The configuration section identified by the path, or None if it doesn't exist
    """
    for p in path:
        conf = conf.get(p, None)
        if conf is None:
            return
    return conf


def apply_conf_path(conf: Section, name_parts, target):
    """
    Applies a configuration path to a given target object
    :param conf:        The root configuration object
    :param name_parts:  The path of the configuration to apply
    :param target:      The target object that receives the configured values
    """
    conf = fetch_conf_path(conf, name_parts)
    if conf:
        apply_conf(conf, target)


def apply_conf(conf, target):
    """
    Applies the values in a configuration to a target object, setting any attributes the target
    already has with the same name.
    """
    for k, v in conf.items():
        if hasattr(target, k) and not k.startswith('_'):
            setattr(target, k, v)


def load_switcher_config(name, directory, path='switcher') -> SwitcherConfig:
    """
    Loads the switcher options from the configuration files named after name.
    :param name: the base name of the configuration files
    :param directory: the directory holding the configuration files
    :param path: the dotted path of the section holding the switcher options
    :return: a SwitcherConfig. Options not given in the files keep their defaults.
    """
    conf = load_config(name, directory)
    section = fetch_conf_path(conf, path.split('.'))
    options = ConfigObj(section.dict() if isinstance(section, Section) else {}, configspec=switcher_schema)
    validate_config(options, name)

    config = SwitcherConfig()
    apply_conf(options, config)
    return config
