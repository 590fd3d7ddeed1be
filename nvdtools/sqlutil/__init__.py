"""Assignment lists, dataclass-to-column records and nullable timestamps."""