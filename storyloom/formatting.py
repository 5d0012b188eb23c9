from storyloom.containers import LocationContainer


def format_location_items(location):
    """
    One line per visible item. Loose items come first, then items sitting
    in or on something ("a coin - in bag", "a lamp - on table").
    Items shut inside a closed container, at any depth, are left out.
    """
    loose, contained = [], []
    for item in location.items:
        if not location.is_reachable(item):
            continue
        line = location.item_description(item)
        container = location.get_container_for_item(item)
        if container is None:
            loose.append(line)
        elif isinstance(container, LocationContainer):
            contained.append(f"{line} - {container.preferred_prepositions[0]} {container.name}")
        else:
            contained.append(f"{line} - in {container.name}")
    return "\n".join(loose + contained)


def describe_location(location, long=True):
    description = location.get_long_description() if long else location.get_short_description()
    listing = format_location_items(location)
    if listing:
        return f"{description}\n\n{listing}"
    return description
